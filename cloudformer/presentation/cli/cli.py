"""
CLI Module

Architectural Intent:
- Command-line interface for Cloudformer
- Entry point for all user interactions
- Delegates to application use cases via composition root
- Maps use case results to process exit codes
- Supports --verbose/--debug flags for log level control
"""

import argparse
import logging
import sys
import traceback
from dataclasses import replace
from typing import Callable, Optional, Sequence

from cloudformer.application.dtos.stack_dtos import ApplyRequest, parse_key_values
from cloudformer.composition_root import CloudformerContainer, create_container
from cloudformer.domain.entities.deployment import DeployOutcome, InstanceAction
from cloudformer.infrastructure.config import CloudformerConfig, load_config
from cloudformer.infrastructure.logging import configure_logging, resolve_level

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cloudformer",
        description="Cloudformer: deploy and supervise CloudFormation stacks",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit diagnostics as JSON lines"
    )
    parser.add_argument("--config", "-c", help="Path to cloudformer.json")
    parser.add_argument("--stack", "-s", help="Stack name")
    parser.add_argument("--region", help="AWS region (overrides config)")
    parser.add_argument("--profile", help="AWS credentials profile (overrides config)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    apply_parser = subparsers.add_parser(
        "apply", help="Create or update the stack and wait for it to settle"
    )
    apply_parser.add_argument(
        "--template", "-t", required=True, help="S3 URL, template URL or local path"
    )
    apply_parser.add_argument(
        "--param", "-p", action="append", default=[], metavar="KEY=VALUE",
        help="Stack parameter (repeatable)",
    )
    apply_parser.add_argument(
        "--capability", action="append", default=[],
        help="Capability to acknowledge, e.g. CAPABILITY_IAM (repeatable)",
    )
    apply_parser.add_argument(
        "--notify", action="append", default=[], metavar="ARN",
        help="Notification topic ARN (repeatable)",
    )
    apply_parser.add_argument(
        "--tag", action="append", default=[], metavar="KEY=VALUE",
        help="Stack tag (repeatable)",
    )
    apply_parser.add_argument(
        "--disable-rollback", action="store_true",
        help="Keep resources of a failed creation for inspection",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate a template")
    validate_parser.add_argument(
        "--template", "-t", required=True, help="S3 URL, template URL or local path"
    )

    subparsers.add_parser("delete", help="Delete the stack and wait for it to go away")
    subparsers.add_parser("status", help="Show the stack status")
    subparsers.add_parser("events", help="Show all stack events")
    subparsers.add_parser("outputs", help="Show the stack outputs")
    subparsers.add_parser("start", help="Start every EC2 instance in the stack")
    subparsers.add_parser("stop", help="Stop every EC2 instance in the stack")

    return parser


def _run_command(args: argparse.Namespace, container: CloudformerContainer) -> int:
    if args.command == "apply":
        request = ApplyRequest(
            template_ref=args.template,
            parameters=parse_key_values(args.param, "parameter"),
            disable_rollback=args.disable_rollback,
            capabilities=tuple(args.capability),
            notify=tuple(args.notify),
            tags=parse_key_values(args.tag, "tag"),
        )
        outcome = container.apply_stack.execute(request)
        print(f"[*] Apply finished: {outcome.value}")
        return EXIT_FAILED if outcome is DeployOutcome.FAILED else EXIT_OK

    if args.command == "validate":
        result = container.validate_template.execute(args.template)
        return EXIT_OK if result.valid else EXIT_FAILED

    if args.command == "delete":
        return EXIT_OK if container.delete_stack.execute() else EXIT_FAILED

    if args.command == "status":
        container.describe_stack.status()
        return EXIT_OK

    if args.command == "events":
        container.describe_stack.events()
        return EXIT_OK

    if args.command == "outputs":
        return container.describe_stack.outputs()

    if args.command in ("start", "stop"):
        report = container.set_instances_state.execute(InstanceAction(args.command))
        return EXIT_OK if report.deployed else EXIT_FAILED

    raise ValueError(f"Unknown command: {args.command}")


def _load_cli_config(args: argparse.Namespace) -> CloudformerConfig:
    """Load config, then apply the log level and the --region/--profile overrides."""
    config = load_config(args.config)
    if not (args.debug or args.verbose):
        configure_logging(
            level=resolve_level(config.log_level), json_format=args.json_logs
        )
    if args.region or args.profile:
        config = replace(
            config,
            aws=replace(
                config.aws,
                region=args.region or config.aws.region,
                profile=args.profile or config.aws.profile,
            ),
        )
    return config


def cli_main(
    argv: Optional[Sequence[str]] = None,
    container_factory: Callable[..., CloudformerContainer] = create_container,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    configure_logging(level=level, json_format=args.json_logs)

    if not args.command:
        parser.print_help()
        return EXIT_OK
    if not args.stack:
        parser.error("--stack is required")

    verbose = args.verbose or args.debug
    try:
        config = _load_cli_config(args)
        container = container_factory(args.stack, config)
        return _run_command(args, container)
    except KeyboardInterrupt:
        print("\n[*] Interrupted. The remote stack operation continues unsupervised.")
        return EXIT_INTERRUPTED
    except ValueError as e:
        print(f"[-] Invalid input: {e}")
        return EXIT_FAILED
    except Exception as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"[-] {args.command.capitalize()} Failed: {e}")
        if verbose:
            traceback.print_exc()
        return EXIT_FAILED


def main():
    sys.exit(cli_main())


if __name__ == "__main__":
    main()

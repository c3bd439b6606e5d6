#!/usr/bin/env python3
"""
Main entry point for mock-code.

mock-code stands in for an interactive coding agent in integration tests:
it answers prompts from a scenario file and runs lifecycle hooks the way
the real agent would.

Usage:
    python main.py run --scenario scenario.json -p "hello"       # Single prompt
    python main.py --scenario scenario.json                       # Interactive (implicit run)
    python main.py run --scenario s.json --hooks-config hooks.json
    python main.py create-scenario > scenario.json                # Wizard

Environment (also read from .env):
    MOCK_CODE_HOME          Where history and transcripts go (default ~/.mock-code/claude)
    MOCK_CODE_HOOK_TIMEOUT  Per-hook timeout in seconds (default 10)
    MOCK_CODE_LOG_LEVEL     Logging level for stderr diagnostics (default WARNING)
"""

import os
import sys
import json
import argparse

from helper import load_env, get_base_dir, get_hook_timeout, get_log_level
from mockcode.logger import logger, configure_logging
from mockcode.errors import ConfigError
from mockcode.hooks import create_hook_executor
from mockcode.scenario import load_scenario_file, DEFAULT_RESPONSES
from mockcode.session import create_session_context
from mockcode.orchestrator import LifecycleOrchestrator, single_prompt, interactive_prompts
from mockcode.create_scenario import create_scenario

COMMANDS = ("run", "create-scenario")


class ArgumentParser(argparse.ArgumentParser):
    """Parser whose usage errors exit with status 1 like every other fatal error."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = ArgumentParser(
        prog="mock-code",
        description="mock-code - A mock CLI tool for testing agent integrations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mock-code run --scenario scenarios.json -p "hello"
  mock-code run --scenario scenarios.json
  mock-code create-scenario
  mock-code --help

Run 'mock-code <command> --help' for more information on a command.
        """
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command")

    run_parser = subparsers.add_parser(
        "run",
        help="Run the mock CLI (default if no command given)",
        description="Run the mock CLI. With -p a single prompt is answered; "
                    "otherwise prompts are read from stdin, one per line.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Scenario file format:
  {"responses": [{"pattern": "^hello", "message": "Hi there!"}]}
  Patterns are matched in order; the first match wins.

Hooks file format:
  {"hooks": [{"event": "SessionStart", "command": "./on-start.sh"}]}
  Events: SessionStart, UserPromptSubmit, PreToolUse, PostToolUse, Stop, SessionEnd

Examples:
  mock-code run --scenario test.json -p "hello world"
  mock-code run --scenario test.json
  mock-code -p "hello"
  mock-code run --scenario test.json --hooks-config hooks.json
        """
    )
    run_parser.add_argument(
        "--scenario",
        type=str,
        default=None,
        help="Path to a JSON scenario file (default: catch-all \"[mock-response]\")"
    )
    run_parser.add_argument(
        "-p",
        dest="prompt",
        type=str,
        default=None,
        help="Single-prompt mode: answer this prompt and exit"
    )
    run_parser.add_argument(
        "--hooks-config",
        type=str,
        default=None,
        help="Path to a JSON hooks configuration file"
    )

    subparsers.add_parser(
        "create-scenario",
        help="Interactively create a scenario file",
        description="Launches an interactive wizard that asks for pattern/message "
                    "pairs one at a time. The resulting JSON is printed to stdout "
                    "and can be redirected to a file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mock-code create-scenario
  mock-code create-scenario > my-scenario.json
        """
    )
    return parser


def attach_prompt_values(argv):
    """
    Join every -p with the argument after it.

    The prompt is taken verbatim, so "-p -hello" answers "-hello" instead of
    argparse reading "-hello" as another option.
    """
    result = []
    i = 0
    while i < len(argv):
        if argv[i] == "-p" and i + 1 < len(argv):
            result.append(f"-p={argv[i + 1]}")
            i += 2
        else:
            result.append(argv[i])
            i += 1
    return result


def parse_args(argv=None) -> argparse.Namespace:
    """Parse arguments, treating a missing subcommand as 'run'."""
    argv = attach_prompt_values(list(sys.argv[1:] if argv is None else argv))
    if not argv or argv[0] not in COMMANDS + ("-h", "--help"):
        argv = ["run"] + argv
    return build_parser().parse_args(argv)


def run_command(args: argparse.Namespace) -> int:
    """Handle the run subcommand."""
    try:
        responses = load_scenario_file(args.scenario) if args.scenario else DEFAULT_RESPONSES
        executor = create_hook_executor(args.hooks_config, timeout=get_hook_timeout())
    except (ConfigError, ValueError) as e:
        logger.error(str(e))
        return 1

    session = create_session_context(os.getcwd(), get_base_dir())
    orchestrator = LifecycleOrchestrator(executor, responses, session)

    if args.prompt is not None:
        prompts = single_prompt(args.prompt)
    else:
        prompts = interactive_prompts()

    try:
        orchestrator.run(prompts)
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        logger.error(f"Error: {e}")
        return 1
    return 0


def create_scenario_command(args: argparse.Namespace) -> int:
    """Handle the create-scenario subcommand."""
    try:
        scenario = create_scenario()
    except (EOFError, KeyboardInterrupt):
        logger.error("Scenario creation aborted")
        return 1
    print(json.dumps(scenario, indent=2))
    return 0


def main(argv=None) -> int:
    load_env()
    configure_logging(get_log_level())

    args = parse_args(argv)
    if args.command == "create-scenario":
        return create_scenario_command(args)
    return run_command(args)


if __name__ == "__main__":
    sys.exit(main())

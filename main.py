"""
main.py

Command-line front end: loads detection events from JSON and prints them in
display form, RFC5424 syslog form, or both.
"""

import argparse
import os
import socket
import sys
from typing import List, Optional

from tabulate import tabulate
from colorama import Fore, Style, init as colorama_init

from events import EVENT_KINDS, MisalignedEndpointsError, SecurityEvent
from events.loader import EventLoadError, load_events
from renderers import Facility, Severity, SyslogHeader, SyslogHeaderError, render_display, render_syslog
from utils import app_logger, config
from utils.logger import LoggerSetup


FORMATS = ["display", "syslog", "both"]


def setup_argument_parser() -> argparse.ArgumentParser:
    """Configure command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="eventrender - Render network detection events as display or syslog lines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s events.json                         # Display form
  %(prog)s events.json -f syslog               # RFC5424 lines
  %(prog)s events.json -f both -o out.log      # Both forms, appended to a file
  %(prog)s events.json -f syslog --facility auth --hostname sensor-01
  %(prog)s --list-kinds                        # Show the event taxonomy
        """
    )

    parser.add_argument(
        "events_file",
        nargs="?",
        help="JSON file holding one event object or a list of them"
    )

    parser.add_argument(
        "-f", "--format",
        type=str,
        default="display",
        choices=FORMATS,
        help="Output form (default: display)"
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        help="Append rendered lines to this file instead of stdout"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to an alternative config.yaml"
    )

    parser.add_argument(
        "--hostname",
        type=str,
        help="Syslog HOSTNAME (default: syslog.hostname or this host's name)"
    )

    parser.add_argument(
        "--app-name",
        type=str,
        help="Syslog APP-NAME (default: syslog.app_name)"
    )

    parser.add_argument(
        "--facility",
        type=str,
        choices=[facility.name.lower() for facility in Facility],
        help="Syslog facility (default: syslog.facility)"
    )

    parser.add_argument(
        "--color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Colourise display output (default: display.color)"
    )

    parser.add_argument(
        "--list-kinds",
        action="store_true",
        help="List the supported event kinds and exit"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress non-essential output"
    )

    return parser


def print_header(title: str, quiet: bool = False) -> None:
    """Print a formatted section header with color."""
    if not quiet:
        print(f"\n{Fore.CYAN}{'=' * 60}")
        print(f"{title}")
        print(f"{'=' * 60}{Style.RESET_ALL}")


def list_event_kinds() -> None:
    """Display the event taxonomy as a table."""
    rows = [
        [name, cls.KIND, cls.LEVEL.name.lower(), cls.LEARNING_METHOD.value]
        for name, cls in sorted(EVENT_KINDS.items())
    ]

    print_header("Supported Event Kinds")
    print(tabulate(
        rows,
        headers=["Kind", "Description", "Level", "Learning Method"],
        tablefmt="grid",
    ))


def build_header(event: SecurityEvent, args: argparse.Namespace) -> SyslogHeader:
    """
    Assemble the RFC5424 header for one event from CLI options and config.

    The event's detection time becomes TIMESTAMP and its kind name MSGID.
    """
    facility_name = args.facility or config.get("syslog.facility", "local0")
    level_name = event.LEVEL.name.lower()
    severity_name = config.get(f"syslog.severity_by_level.{level_name}", "warning")
    procid = config.get("syslog.procid") or os.getpid()

    try:
        facility = Facility[str(facility_name).upper()]
        severity = Severity[str(severity_name).upper()]
    except KeyError as e:
        raise SyslogHeaderError(f"Unknown syslog facility or severity in configuration: {e}")

    return SyslogHeader(
        facility=facility,
        severity=severity,
        timestamp=event.time,
        hostname=args.hostname or config.get("syslog.hostname") or socket.gethostname(),
        app_name=args.app_name or config.get("syslog.app_name", "eventrender"),
        procid=str(procid),
        msgid=event.kind_name,
    )


def colorize(line: str, event: SecurityEvent) -> str:
    """Highlight the kind name at the start of a display line."""
    name = event.kind_name
    return f"{Fore.CYAN}{name}{Style.RESET_ALL}{line[len(name):]}"


def render_event(event: SecurityEvent, args: argparse.Namespace, color: bool) -> List[str]:
    """Render one event in the requested form(s)."""
    lines = []

    if args.format in ("display", "both"):
        line = render_display(event)
        lines.append(colorize(line, event) if color else line)

    if args.format in ("syslog", "both"):
        lines.append(render_syslog(event, build_header(event, args)))

    return lines


def write_lines(lines: List[str], output: Optional[str]) -> None:
    """Write lines to stdout, or append them to ``output``."""
    if output is None:
        for line in lines:
            print(line)
        return

    with open(output, "a", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")

    app_logger.info(f"Appended {len(lines)} lines to {output}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    # Initialize colorama for Windows compatibility
    colorama_init()

    if args.config:
        try:
            config.reload(args.config)
        except (FileNotFoundError, ValueError) as e:
            app_logger.error(f"Failed to load configuration: {e}")
            print(f"{Fore.RED}[!] Config Error:{Style.RESET_ALL} {e}", file=sys.stderr)
            return 1

    if args.verbose:
        LoggerSetup.set_level("DEBUG")
    elif args.quiet:
        LoggerSetup.set_level("WARNING")

    if args.list_kinds:
        list_event_kinds()
        return 0

    if not args.events_file:
        parser.error("an events file is required unless --list-kinds is given")

    # Colour codes only make sense on a terminal
    color = args.color if args.color is not None else bool(config.get("display.color", False))
    color = color and args.output is None

    try:
        app_logger.info(f"Rendering {args.events_file} as {args.format}")
        if config.source is None:
            app_logger.debug("config.yaml not found, using built-in defaults")

        try:
            events = load_events(args.events_file)
        except (FileNotFoundError, EventLoadError, MisalignedEndpointsError) as e:
            app_logger.error(f"Failed to load events: {e}")
            if not args.quiet:
                print(f"{Fore.RED}[!] Load Error:{Style.RESET_ALL} {e}", file=sys.stderr)
            return 1

        lines: List[str] = []
        try:
            for event in events:
                lines.extend(render_event(event, args, color))
        except SyslogHeaderError as e:
            app_logger.error(f"Invalid syslog header: {e}")
            if not args.quiet:
                print(f"{Fore.RED}[!] Header Error:{Style.RESET_ALL} {e}", file=sys.stderr)
            return 1

        write_lines(lines, args.output)

        app_logger.info(f"Rendered {len(events)} events")
        return 0

    except KeyboardInterrupt:
        app_logger.warning("Rendering interrupted by user")
        return 130

    except Exception as e:
        app_logger.error(f"Unexpected error: {e}", exc_info=True)
        if not args.quiet:
            print(f"{Fore.RED}[!] Error:{Style.RESET_ALL} {e}", file=sys.stderr)
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()

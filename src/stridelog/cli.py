"""CLI interface for StrideLog."""

from collections.abc import Callable

from .activity_log import ActivityLog, open_activity_log
from .commands import kind_from_command, parse_activity_args, parse_coordinates
from .config import StrideLogConfig, config_from_env
from .errors import StrideLogError
from .formatting import format_coordinates, format_popup, format_record, format_record_list
from .logging import configure_logger, get_logger
from .storage import SQLiteStore

BANNER = """
╔══════════════════════════════════════════╗
║              🏃 StrideLog                ║
║       Personal activity logbook          ║
╚══════════════════════════════════════════╝

Commands:
  /at LAT LNG                 - Mark where the activity happened
  /run KM MIN CADENCE         - Log a run at the marked position
  /cycle KM MIN ELEVATION_M   - Log a ride
  /walk KM MIN STEPS          - Log a walk
  /list                       - Show all activities
  /show ID                    - Show one activity and its position
  /reset                      - Delete all activities
  /help                       - Show this help
  /exit, /quit                - Exit the CLI
"""


class CLI:
    """Interactive command-line interface for StrideLog."""

    def __init__(
        self,
        activity_log: ActivityLog | None = None,
        config: StrideLogConfig | None = None,
        output: Callable[[str], None] = print,
    ) -> None:
        self.config = config or config_from_env()
        self.logger = get_logger()
        self.store: SQLiteStore | None = None

        if activity_log is None:
            activity_log, self.store = open_activity_log(self.config, logger=self.logger)

        self.activity_log = activity_log
        self.position: tuple[float, float] | None = None
        self.output = output

    def _set_position(self, args: list[str]) -> None:
        self.position = parse_coordinates(args)
        self.output(f"📍 Position set to {format_coordinates(self.position)}")

    def _log(self, command: str, args: list[str]) -> None:
        kind = kind_from_command(command)
        assert kind is not None

        if self.position is None:
            self.output("❌ Mark a position first with /at LAT LNG")
            return

        inputs = parse_activity_args(kind, args)
        record = self.activity_log.log_activity(kind, self.position, inputs)
        self.output(f"\n{format_record(record)}")

    def _show(self, args: list[str]) -> None:
        if len(args) != 1:
            self.output("Usage: /show ID")
            return

        record = self.activity_log.mark_used(args[0])
        self.output(f"\n{format_record(record)}")
        self.output(f"📍 {format_popup(record)} at {format_coordinates(record.coordinates)}")

    def _reset(self) -> None:
        count = self.activity_log.clear_all()
        self.position = None
        self.output(f"\n✓ Deleted {count} activit{'y' if count == 1 else 'ies'}.")

    def handle_command(self, line: str) -> bool:
        """Handle one input line. Returns True to continue, False to exit."""
        parts = line.strip().split()
        if not parts:
            return True

        cmd, args = parts[0].lower(), parts[1:]

        if cmd in ("/exit", "/quit", "exit", "quit"):
            return False

        try:
            if cmd == "/at":
                self._set_position(args)
            elif kind_from_command(cmd) is not None and cmd.startswith("/"):
                self._log(cmd, args)
            elif cmd == "/list":
                self.output("\n" + format_record_list(self.activity_log.records))
            elif cmd == "/show":
                self._show(args)
            elif cmd == "/reset":
                self._reset()
            elif cmd == "/help":
                self.output(BANNER)
            else:
                self.output(f"Unknown command: {cmd}. Type /help.")
        except StrideLogError as e:
            self.output(f"❌ {e}")

        return True

    def close(self) -> None:
        """Persist usage counters and release the store."""
        self.activity_log.save()
        if self.store is not None:
            self.store.close()
            self.store = None

    def run(self) -> None:
        """Run the interactive CLI."""
        self.output(BANNER)
        self.output(f"{len(self.activity_log)} activities loaded.\n")
        self.logger.set_source("cli")
        self.logger.log("session_start", count=len(self.activity_log))

        try:
            while True:
                try:
                    user_input = input("you> ")
                except (KeyboardInterrupt, EOFError):
                    break

                if not self.handle_command(user_input):
                    break
        finally:
            self.close()
            self.logger.log("session_end")
            self.output("\n👋 Goodbye!")


def run_cli() -> None:
    """Run the CLI with configuration from the environment."""
    config = config_from_env()
    assert config.log_dir is not None
    configure_logger(config.log_dir, max_size_mb=config.log_max_size_mb)

    cli = CLI(config=config)
    cli.run()

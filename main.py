import sys
import os
import curses

from app_logging import setup_logging
from config_paths import ensure_config_dirs, load_config
from errors import ParseError
from record_session import RecordSession

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")
from orchestrator import Orchestrator

try:
    from _version import __version__
except ImportError:
    __version__ = "0.0.0"


USAGE = (
    "litrev - literature review record editor\n\n"
    "Usage:\n  litrev [path.csv]\n  litrev -v\n  litrev -h\n\n"
    "Shortcuts: Save Changes - Enter, Next - 2, Previous - 3, Help - ?\n"
)


def build_session(path, config):
    """Create the session and load ``path`` if given; raises ParseError."""
    session = RecordSession(
        read_only_fields=config["READ_ONLY_FIELDS"],
        export_filename=config.get("EXPORT_FILENAME"),
    )
    if path:
        session.load_path(path)
    return session


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    if "-v" in args or "-V" in args:
        print(__version__)
        return 0

    if "-h" in args or "--help" in args:
        print(USAGE)
        return 0

    if len(args) > 1:
        print(USAGE, file=sys.stderr)
        return 2

    ensure_config_dirs()
    config = load_config()
    log = setup_logging(config["LOG_LEVEL"])

    path = args[0] if args else None
    try:
        session = build_session(path, config)
    except ParseError as e:
        log.warning("Load of %s failed: %s", path, e)
        print(f"Load failed: {e}", file=sys.stderr)
        return 1

    def curses_main(stdscr):
        Orchestrator(stdscr, session, config).run()

    curses.wrapper(curses_main)
    return 0


if __name__ == "__main__":
    sys.exit(main())

import sys
import json
import logging
from pathlib import Path

from . import __version__

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _setup_console_logging(verbose=False):
    # stdout is reserved for the JSON verdict
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _bundled_config_path():
    # PyInstaller unpacks data files under sys._MEIPASS
    if getattr(sys, "frozen", False):
        return Path(getattr(sys, "_MEIPASS", Path.cwd())) / "config.yaml"
    return Path(__file__).parent / "config.yaml"


def _pop_flag(argv, *names):
    found = False
    for name in names:
        while name in argv:
            argv.remove(name)
            found = True
    return found


def _pop_option(argv, name):
    """Remove `name VALUE` from argv and return VALUE; a dangling name is left for the parser to reject."""
    if name not in argv:
        return None
    i = argv.index(name)
    if i + 1 >= len(argv):
        return None
    value = argv[i + 1]
    del argv[i:i + 2]
    return value


def main(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)

    if "--version" in argv:
        print(__version__)
        return 0

    verbose = _pop_flag(argv, "--verbose", "-v")
    _setup_console_logging(verbose)

    config_path = _pop_option(argv, "--config")
    if not config_path:
        bundled = _bundled_config_path()
        config_path = str(bundled) if bundled.exists() else None

    # Deferred so --version never imports the checks
    from .application.check_device import CheckDeviceUseCase

    result = CheckDeviceUseCase(config_path, verbose=verbose).execute_from_command_line(argv)
    result.setdefault("metadata", {}).update({
        "engineVersion": __version__,
        "schemaVersion": 1,
    })

    print(json.dumps(result, indent=2))
    return 2 if result.get("error") else 0


if __name__ == "__main__":
    sys.exit(main())

import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "litrev")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "litrev.log")

# default settings
READ_ONLY_FIELDS_DEFAULT = ["Title", "Abstract"]
EXPORT_FILENAME_DEFAULT = "updated_data.csv"
KEY_BINDINGS_DEFAULT = {
    "submit": ["enter"],
    "next": ["2"],
    "previous": ["3"],
}
STATUS_SECONDS_DEFAULT = 3
LOG_LEVEL_DEFAULT = "INFO"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


def ensure_config_dirs():
    try:
        os.makedirs(CONFIG_DIR, exist_ok=True)
    except OSError:
        pass


def _valid_key_name(name):
    return isinstance(name, str) and (name == "enter" or len(name) == 1)


def load_config():
    cfg = {
        "READ_ONLY_FIELDS": list(READ_ONLY_FIELDS_DEFAULT),
        "EXPORT_FILENAME": EXPORT_FILENAME_DEFAULT,
        "KEY_BINDINGS": {k: list(v) for k, v in KEY_BINDINGS_DEFAULT.items()},
        "STATUS_SECONDS": STATUS_SECONDS_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        import json

        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return cfg
    if not isinstance(data, dict):
        return cfg

    fields = data.get("read_only_fields")
    if isinstance(fields, list) and all(isinstance(x, str) for x in fields):
        cfg["READ_ONLY_FIELDS"] = list(fields)

    fname = data.get("export_filename")
    if isinstance(fname, str) and fname.strip():
        cfg["EXPORT_FILENAME"] = fname.strip()

    bindings = data.get("key_bindings")
    if isinstance(bindings, dict):
        for trigger, keys in bindings.items():
            if trigger not in KEY_BINDINGS_DEFAULT:
                continue
            if isinstance(keys, str):
                keys = [keys]
            if not (isinstance(keys, list) and keys):
                continue
            if not all(_valid_key_name(k) for k in keys):
                continue
            cfg["KEY_BINDINGS"][trigger] = list(keys)

    seconds = data.get("status_seconds")
    if isinstance(seconds, (int, float)) and not isinstance(seconds, bool) and seconds > 0:
        cfg["STATUS_SECONDS"] = seconds

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg

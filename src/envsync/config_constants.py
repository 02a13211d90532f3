from enum import Enum


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


# -------------------------
# File name defaults
# -------------------------

DEFAULT_INPUT_FILE = ".env.example"
DEFAULT_OUTPUT_FILE = ".env"
DEFAULT_TEMPLATE_FILE = ".env-template"

# Value written into every declaration of a generated template
DEFAULT_PLACEHOLDER = "<YOUR_VALUE_HERE>"

DEFAULT_ENCODING = "utf-8"

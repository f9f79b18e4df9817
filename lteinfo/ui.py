"""ANSI colour codes and fixed terminal text used by the status display."""

OFF = "\033[0m"
RED = "\033[2;31m"
GREEN = "\033[2;32m"
YELLOW = "\033[2;33m"
BLUE = "\033[2;34m"
MAGENTA = "\033[2;35m"
CYAN = "\033[2;36m"
WHITE = "\033[2;37m"
GREY = "\033[2;90m"
ALERT = "\033[1;31m"
ALERT_GREEN = "\033[1;32m"

CLEAN_NEWLINE = "\n" + OFF
ALERT_BANNER = ALERT + "[-= ***! ALERT !*** =-]" + OFF
OK = ALERT_GREEN + "[OK]" + OFF
PROGRESS = OFF + "[" + GREY + "-= information colletion in _progress =-" + OFF + "]"
DEFAULTS = OFF + "[" + GREY + "-= information not (yet) emitted from device =-" + OFF + "]"
DEFAULTS_SHORT = GREY + "n/a" + OFF
SECTION_LINE = WHITE + "#" * 107
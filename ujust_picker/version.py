"""Build identification printed by ``--version``.

Release builds overwrite these constants.
"""

VERSION = "0.1.0"
COMMIT = "none"
BUILD_DATE = "unknown"


def version_line(program: str = "ujust-picker") -> str:
    return f"{program} version {VERSION}, commit {COMMIT}, built at {BUILD_DATE}"

"""Container launcher.

Points the app at $ROSTER_DATA_DIR (usually a mounted volume), seeds that
directory with the bundled roster the first time, then hands the process over
to `streamlit run app.py`.
"""

import logging
import os
import shutil
import sys
from pathlib import Path

from core.settings_manager import BUNDLED_DATA_DIR, ROOT_DIR, data_dir

logger = logging.getLogger("roster.entrypoint")


def prepare_data_dir() -> list:
    """Copy bundled JSON files the data dir does not have yet.

    Existing files (an edited roster, saved user settings) are never touched.
    Returns the names that were copied.
    """
    target = data_dir()
    if target.resolve() == BUNDLED_DATA_DIR.resolve():
        return []

    target.mkdir(parents=True, exist_ok=True)
    copied = []
    for src in sorted(BUNDLED_DATA_DIR.glob("*.json")):
        dest = target / src.name
        if dest.exists():
            continue
        shutil.copy2(src, dest)
        copied.append(src.name)

    if copied:
        logger.info("Seeded %s with %s", target, ", ".join(copied))
    return copied


def build_command(extra_args=None) -> list:
    port = os.getenv("STREAMLIT_SERVER_PORT", "8501")
    address = os.getenv("STREAMLIT_SERVER_ADDRESS", "0.0.0.0")
    return [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        str(ROOT_DIR / "app.py"),
        "--server.port",
        str(port),
        "--server.address",
        str(address),
        *(extra_args or []),
    ]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="[roster] %(message)s")
    prepare_data_dir()
    args = build_command(sys.argv[1:])
    os.execvp(args[0], args)


if __name__ == "__main__":
    main()

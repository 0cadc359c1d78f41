"""Pipeline script: generate DocFX metadata, then resolve <inheritdoc/> tags."""

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> None:
    """Generate metadata with docfx and post-process the XML documentation."""
    parser = argparse.ArgumentParser(
        description="Generate DocFX metadata and resolve <inheritdoc/> tags."
    )
    parser.add_argument(
        "--base",
        type=Path,
        default=Path.cwd(),
        help="Solution directory holding docfx.json and the build output",
    )
    parser.add_argument(
        "--skip-metadata",
        action="store_true",
        help="Reuse the existing api/*.yml metadata instead of running docfx",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace the XML documentation files instead of writing .new.xml",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    args = parser.parse_args()

    base = args.base.resolve()

    if not args.skip_metadata:
        print("--- Step 1: Generating DocFX metadata ---")
        run_command(["dotnet", "docfx", "metadata"], cwd=base)

    print("\n--- Step 2: Resolving <inheritdoc/> tags ---")
    cmd = [
        sys.executable,
        "-m",
        "inheritdoc.cli",
        "--base",
        str(base),
        "--metadata",
        str(base / "api"),
    ]
    if args.overwrite:
        cmd.append("--overwrite")
    if args.config:
        cmd.extend(["--config", args.config])

    run_command(cmd)


if __name__ == "__main__":
    main()

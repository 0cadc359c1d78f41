"""Development script to run formatting, linting and the test suite."""

import argparse
import subprocess
import sys


def run_command(command: list[str], step_name: str) -> None:
    """Run a shell command as a step in the development process."""
    print(f"\n--- Running Step: {step_name} ---")
    print(f"$ {' '.join(command)}")
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError:
        print(f"\nFailed: {step_name}")
        sys.exit(1)


def main() -> None:
    """Format and fix the code base (unless --ci), then lint and test it."""
    parser = argparse.ArgumentParser(description="Run development checks.")
    parser.add_argument(
        "--ci", action="store_true", help="Check only, do not rewrite files"
    )
    args = parser.parse_args()

    if args.ci:
        run_command(["uv", "run", "ruff", "format", "--check"], "Ruff Format Check")
    else:
        run_command(["uv", "run", "ruff", "format"], "Ruff Formatting")
        run_command(["uv", "run", "ruff", "check", "--fix"], "Ruff Fixes")

    run_command(["uv", "run", "ruff", "check"], "Ruff Linting")
    run_command(["uv", "run", "pytest"], "Tests")

    print("\nAll development checks passed successfully.")


if __name__ == "__main__":
    main()

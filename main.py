# Main.py
""""" Entry point for the Big Number Calculator.

   Responsibilities:
   - Verify required files exist in development mode
   - Load configuration
   - Evaluate one expression from the command line, or run an interactive loop

"""""
import sys
import argparse
from pathlib import Path

from Calculator import config_manager as config_manager, MathEngine as MathEngine
from Calculator import error as E


PROJECT_ROOT = Path(__file__).resolve().parent


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
    """

    modules_dir = PROJECT_ROOT / "Calculator"

    REQUIRED = [
        modules_dir / "DecimalValue.py",
        modules_dir / "MathEngine.py",
        modules_dir / "ScientificEngine.py",
        modules_dir / "config_manager.py",
        modules_dir / "error.py",
        PROJECT_ROOT / "config.json"
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def run_problem(problem):
    """Print the result of one problem. Returns False if it failed."""
    try:
        print(MathEngine.calculate(problem))
        return True
    except E.MathError as e:
        category, _ = E.describe(e.code)
        print(f"{category} {e.code}: {e.message}")
        return False


def repl():
    print("Enter a problem ('exit' to quit):")
    while True:
        try:
            problem = input("> ")
        except EOFError:
            break

        if problem.strip().lower() in ("exit", "quit"):
            break
        if problem.strip():
            run_problem(problem)


def main(argv=None):

    """
    Load configuration and evaluate.
    - Keep this thin: no business logic here.
    """

    parser = argparse.ArgumentParser(description="Exact decimal calculator.")
    parser.add_argument("expression", nargs="*", help="expression to evaluate, e.g. '2(3) + fact(4)'")
    args = parser.parse_args(argv)

    all_settings = config_manager.load_setting_value("all")
    MathEngine.debug = bool(all_settings.get("debug", False))

    if args.expression:
        return 0 if run_problem(" ".join(args.expression)) else 1

    repl()
    return 0


if __name__ == "__main__":
    check_files_exist()
    sys.exit(main())

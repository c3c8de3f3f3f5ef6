from pathlib import Path
import sys

from dotenv import load_dotenv

# Ensure the src directory is on sys.path when running as a script
_SRC_DIR = Path(__file__).resolve().parents[1]
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from objectives.presentation.cli import main as cli_main

load_dotenv()


def _print_help_surface() -> None:
    print("\nHelp:")
    print("- Run with --days N to simulate N day starts.")
    print("- Set OBJECTIVES_RNG_SEED or pass --seed for repeatable objectives.")
    print("- Set OBJECTIVES_PRISONERS or pass --prisoners to unlock prisoner objectives.")


def main(argv=None) -> int:
    try:
        return cli_main(argv)
    except KeyboardInterrupt:
        print("\nSession ended.")
        return 130
    except Exception as exc:
        print("An unexpected error occurred. The simulation closed safely.")
        print(f"Reason: {exc}")
        _print_help_surface()
        return 1


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import argparse
from typing import Sequence

from infra.config import CONFIG_FILENAME, FileSystemConfigProvider
from infra.mocking import FAKE_ENGINES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fakekit")
    sub = parser.add_subparsers(dest="command", required=True)

    validate_p = sub.add_parser("validate-config", help=f"Check {CONFIG_FILENAME} in a directory")
    validate_p.add_argument("--config-dir", default=".", help="Directory holding the config file")

    sub.add_parser("engines", help="List the available fake engines")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "validate-config":
        provider = FileSystemConfigProvider(args.config_dir)
        errors = provider.validate()
        if errors:
            for error in errors:
                print(f"  - {error}")
            return 1
        config = provider.get_config()
        print(f"config ok (engine={config.engine}, log_level={config.log_level})")
        return 0

    if args.command == "engines":
        for name in sorted(FAKE_ENGINES):
            print(name)
        return 0

    raise SystemExit(f"Unsupported command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())

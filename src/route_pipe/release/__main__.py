from __future__ import annotations

import argparse
import json
import logging
from typing import List, Optional

import anyio

from route_pipe.release.helpers import update_latest_tag


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Point the `latest` git tag at a released version.")
    parser.add_argument("version", help="Released version, e.g. 1.4.0 or v1.4.0")
    parser.add_argument("--dry-run", action="store_true", help="Report what would change without touching git")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    result = anyio.run(lambda: update_latest_tag(args.version, dry_run=args.dry_run))
    print(json.dumps(result.model_dump(), ensure_ascii=False))
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations
import argparse, json, logging, sys
from phrasebook import Engine
from phrasebook import export
from phrasebook.config import SUGGESTION_LIMIT, DEFAULT_DSN


def _print_rows(rows: list[str], as_json: bool) -> None:
    if as_json:
        print(json.dumps(rows, ensure_ascii=False, indent=2))
        return
    if not rows:
        print("(no matches)"); return
    for i, r in enumerate(rows, 1):
        print(f"{i:<3} {r}")


def _write_file(filename: str, content: str, _mime: str) -> None:
    with open(filename, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    print(f"wrote {filename}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Phrase catalog CLI (Engine-backed)")
    p.add_argument("--db", default=DEFAULT_DSN, help='Store DSN: "sqlite:///path" or "memory://"')
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("-k", type=int, default=SUGGESTION_LIMIT, help="Max suggestions")
    p.add_argument("--add", action="append", default=[], help="Add a phrase (front of catalog)")
    p.add_argument("--import", dest="import_file", default=None, help="Import phrases, one per line")
    p.add_argument("--remove", action="append", default=[], help="Remove a phrase")
    p.add_argument("--reset", action="store_true", help="Reset catalog to defaults")
    p.add_argument("--custom", action="store_true", help="List custom phrases")
    p.add_argument("--export-custom", choices=sorted(export.MIME_TYPES), default=None)
    p.add_argument("--rows", choices=["column", "row"], default=None, help="Print copied rows")
    p.add_argument("--clear-rows", action="store_true")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--json", action="store_true", help="Emit JSON lists")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    eng = Engine()
    try:
        eng.open(args.db)

        if args.reset:
            eng.catalog.reset_to_default()
        for phrase in args.add:
            eng.catalog.add(phrase)
        for phrase in args.remove:
            eng.catalog.remove(phrase)
        if args.import_file:
            with open(args.import_file, encoding="utf-8") as f:
                added = eng.catalog.bulk_import(f.read())
            print(f"imported {added} new phrases")
        if args.clear_rows:
            eng.rows.clear()

        if args.custom:
            _print_rows(eng.custom_items(), args.json)
        if args.export_custom:
            eng.export_custom(args.export_custom, _write_file)
        if args.rows:
            print(eng.rows_payload(args.rows))

        if args.q is not None:
            _print_rows(eng.suggest(args.q, limit=args.k), args.json)

        if args.repl:
            print("Type a query (empty line to exit).")
            while True:
                try:
                    q = input("> ")
                except (EOFError, KeyboardInterrupt):
                    break
                if not q.strip():
                    break
                _print_rows(eng.suggest(q, limit=args.k), args.json)

        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    sys.exit(main())

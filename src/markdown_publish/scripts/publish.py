"""Command-line publisher.

Usage:
  markdown-publish upload ./file1.md ./file2.md
  markdown-publish remove file1
  markdown-publish list

Env:
  MARKDOWN_PUBLISH_URL (default http://127.0.0.1:8080)
  MARKDOWN_PUBLISH_API_KEY
"""

from __future__ import annotations

import sys

from ..client import FileResult, PublishClient, load_client_settings

USAGE = """markdown publish - Simple Markdown Publisher

  # Usage
      markdown-publish <command> [<args>]

  # Command
      - 'upload' or 'u'  -> upload markdown files to the server
      - 'remove' or 'r'  -> remove markdown files from the server
      - 'list' or 'l'    -> list markdown files on the server
"""

COMMANDS = {
    "upload": "upload", "u": "upload",
    "remove": "remove", "r": "remove",
    "list": "list", "l": "list",
}


def format_results(results: list[FileResult]) -> str:
    lines = ["# Result", f"{'idx':<10}  {'file name':<40}  {'file status':<10}"]
    for idx, r in enumerate(results, start=1):
        lines.append(f"{idx:<10}  {r.file_name:<40}  {r.status.value:<10}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    command = COMMANDS.get(args[0]) if args else None
    if command is None:
        print(USAGE)
        return 0

    try:
        base_url, api_key = load_client_settings()
    except ValueError as e:
        raise SystemExit(str(e))

    with PublishClient(base_url, api_key) as client:
        if command == "upload":
            results = client.upload(args[1:])
        elif command == "remove":
            results = client.remove(args[1:])
        else:
            results = client.list()
    print(format_results(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())

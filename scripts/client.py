#!/usr/bin/env python3
"""
Interactive Test Client for kvhttp

A simple command-line client for manually testing the kvhttp server.

Usage:
    python scripts/client.py                  # Connect to 127.0.0.1:8080
    python scripts/client.py --host 1.2.3.4   # Connect to specific host
    python scripts/client.py --port 9000      # Connect to specific port

Commands:
    GET <key>                 - Retrieve a value
    SET <key> <value>         - Store a key-value pair
    RAW <json>                - Send a raw request body
    help                      - Show this help
    exit                      - Exit client
"""

import argparse
import json

import httpx

from kvhttp.client import KVClient

# Enable command history with arrow keys (works on Unix systems)
try:
    import readline  # noqa: F401
except ImportError:
    pass  # readline not available on Windows by default


def print_help():
    """Print help message."""
    print("""
kvhttp Commands:
----------------
  GET <key>                 Retrieve the value for a key
  SET <key> <value>         Store a key-value pair (value may contain spaces)
  RAW <json>                Send a raw request body as-is

Client Commands:
----------------
  help                      Show this help message
  exit                      Exit the client

Examples:
---------
  SET mykey myvalue         Store "myvalue" under "mykey"
  GET mykey                 Get value for "mykey"
  RAW {"op": "DELETE"}      See how the server rejects unknown ops
""")


def run_command(client: KVClient, line: str) -> str:
    """Translate one input line into a request and format the reply."""
    name, _, rest = line.partition(" ")
    name = name.upper()

    if name == "RAW":
        response = client.send_raw(rest.encode("utf-8"))
        return json.dumps(response.json())

    if name == "GET":
        payload = {"op": "GET", "key": rest.strip()}
    elif name == "SET":
        key, _, value = rest.strip().partition(" ")
        payload = {"op": "SET", "key": key, "value": value}
    else:
        # Let the server report the unrecognised op
        payload = {"op": name, "key": rest.strip()}

    return json.dumps(client.send(payload))


def execute(client: KVClient, line: str) -> str:
    """Run one input line, reporting transport failures and non-JSON replies as text."""
    try:
        return run_command(client, line)
    except httpx.HTTPError as e:
        return f"ERROR: {e}"
    except ValueError as e:
        return f"ERROR: server reply is not JSON ({e})"


def main():
    parser = argparse.ArgumentParser(
        description="Interactive test client for kvhttp"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Server host (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8080,
        help="Server port (default: 8080)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        help="Request timeout in seconds (default: 5.0)"
    )

    args = parser.parse_args()

    print("kvhttp Client")
    print("=============")
    print(f"Talking to http://{args.host}:{args.port}/")
    print("Type 'help' for commands.\n")

    with KVClient(args.host, args.port, args.timeout) as client:
        try:
            while True:
                try:
                    command = input(">>> ").strip()
                except EOFError:
                    print("\nGoodbye!")
                    break

                if not command:
                    continue

                lower_cmd = command.lower()

                if lower_cmd == "help":
                    print_help()
                    continue

                if lower_cmd in ("exit", "quit"):
                    print("Goodbye!")
                    break

                print(execute(client, command))

        except KeyboardInterrupt:
            print("\n\nInterrupted. Goodbye!")


if __name__ == "__main__":
    main()

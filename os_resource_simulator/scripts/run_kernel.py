from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

# Ensure repo root is on sys.path so this script can be executed directly
repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from colorama import Fore, init as colorama_init

from os_resource_simulator.backend.core import ValidationError
from os_resource_simulator.backend.os_kernel import OSKernel, KernelConfig, Mode


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Run a JSON simulation payload through the kernel')
    parser.add_argument('mode', choices=list(Mode.ALL), help='Which simulation the payload describes')
    parser.add_argument('payload', type=str, help="Path to the JSON payload, or '-' for stdin")
    parser.add_argument('--out', type=str, default=None, help='Write the JSON result here instead of stdout')
    parser.add_argument('--time-quantum', type=int, default=2, help='Default RR quantum when the payload has none')
    parser.add_argument('--frames', type=int, default=3, help='Default frame count when the payload has none')
    parser.add_argument('--max-cylinder', type=int, default=199, help='Default max cylinder when the payload has none')
    args = parser.parse_args(argv)
    colorama_init(autoreset=True)

    try:
        if args.payload == '-':
            payload = json.load(sys.stdin)
        else:
            with open(args.payload, encoding='utf-8') as f:
                payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(Fore.RED + f"Could not read payload: {e}", file=sys.stderr)
        return 1

    kernel = OSKernel(KernelConfig(time_quantum=args.time_quantum, frame_count=args.frames, max_cylinder=args.max_cylinder))
    try:
        result = kernel.run(args.mode, payload)
    except ValidationError as e:
        print(Fore.RED + f"Invalid input: {e}", file=sys.stderr)
        return 2

    text = json.dumps(result, indent=2)
    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text + "\n", encoding='utf-8')
        print(Fore.CYAN + f"Result written to {out}")
    else:
        print(text)
    return 0


if __name__ == '__main__':
    sys.exit(main())

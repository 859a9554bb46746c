"""Generate address and hash YAML vectors from the Python codec."""

from __future__ import annotations

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT / "tools"))

from ckb_address.crypto.hash_vectors import blake160_vectors, blake2b_256_vectors  # noqa: E402
from ckb_address.vectors import address_vectors_json  # noqa: E402
from yaml_dump import write_yaml  # noqa: E402


def main() -> None:
    out = ROOT / "fixtures"
    (out / "crypto").mkdir(parents=True, exist_ok=True)

    write_yaml(out / "crypto" / "blake2b_256.yaml", blake2b_256_vectors())
    write_yaml(out / "crypto" / "blake160.yaml", blake160_vectors())
    write_yaml(out / "address.yaml", address_vectors_json())


if __name__ == "__main__":
    main()

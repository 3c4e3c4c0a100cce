###############################################################
# CONFIG - MerkleProofAddressChecker.py
#
# Checks ADDRESSES_TO_CHECK against the newest
# merkle_root_epoch_*.txt written by MerkleRootGen.py, using
# whitelist_epoch<N>.txt (or whitelist.txt) to rebuild the tree.
# Hex case does not matter.
#
# Run: python MerkleProofAddressChecker.py
#
# The printed proof is the bytes32[] a client passes to
# checkInWhitelist(proof) / mintWhitelist(..., proof).
###############################################################

ADDRESSES_TO_CHECK = [
    "0x7eC55A0200671F83A4acA56CdDb14A5Dc13db593",
    "0xcbb98843270812eeCE07BFb82d26b4881a33aA91",
    "0x0000000000000000000000000000000000000000",
    # Add more addresses as needed,
]

import glob
import json
import os
import re

from eth_utils import to_checksum_address

from MerkleRootGen import load_whitelist
from MerkleTreeWhitelist import EntryNotFound, MerkleTreeWhitelist, verify_merkle_proof


ROOT_FILE_RE = re.compile(r"merkle_root_epoch_(\d+)\.txt$")


def get_latest_epoch_root_file(directory="."):
    """(path, epoch) of the newest root file, or (None, -1) when there is none."""
    candidates = []
    for path in glob.glob(os.path.join(directory, "merkle_root_epoch_*.txt")):
        match = ROOT_FILE_RE.search(path)
        if match:
            candidates.append((int(match.group(1)), path))
    if not candidates:
        return None, -1
    epoch, path = max(candidates)
    return path, epoch


def get_matching_whitelist_file(epoch, directory="."):
    per_epoch = os.path.join(directory, f"whitelist_epoch{epoch}.txt")
    return per_epoch if os.path.exists(per_epoch) else os.path.join(directory, "whitelist.txt")


def check_addresses(tree, addresses, root):
    """One result per address: {"address", "included", "proof"}."""
    results = []
    for address in addresses:
        try:
            proof = tree.get_hex_proof(address)
        except (EntryNotFound, ValueError):
            # ValueError: not a hex address at all
            results.append({"address": address, "included": False, "proof": []})
            continue
        included = verify_merkle_proof(proof, address, root)
        results.append({"address": address, "included": included, "proof": proof})
    return results


def _display(address):
    try:
        return to_checksum_address(address)
    except ValueError:
        return address


def main():
    merkle_root_file, latest_epoch = get_latest_epoch_root_file()
    if merkle_root_file is None:
        print("[ERROR] No merkle_root_epoch_*.txt file found.")
        return

    whitelist_file = get_matching_whitelist_file(latest_epoch)

    with open(merkle_root_file, "r") as f:
        merkle_root = f.read().strip()
    print(f"[i] Loaded Merkle root: {merkle_root} (epoch {latest_epoch})")
    print(f"[i] Loading whitelist from: {whitelist_file}")

    if not os.path.exists(whitelist_file):
        print(f"[ERROR] Whitelist file {whitelist_file} not found.")
        return
    whitelist = load_whitelist(whitelist_file)
    if not whitelist:
        print("[ERROR] No addresses found in whitelist!")
        return

    try:
        tree = MerkleTreeWhitelist(whitelist)
    except ValueError as e:
        print(f"[ERROR] {e}")
        return
    if tree.get_hex_root().lower() != merkle_root.lower():
        print(f"[WARN] Rebuilt root {tree.get_hex_root()} does not match {merkle_root_file}")

    for result in check_addresses(tree, ADDRESSES_TO_CHECK, merkle_root):
        if result["address"] not in tree:
            print(f"[NOT FOUND IN WHITELIST] {result['address']}")
            continue
        print(f"Address: {_display(result['address'])}")
        print(f"  Included in Merkle root: {'YES' if result['included'] else 'NO'}")
        print(f"  Merkle Proof: {json.dumps(result['proof'], indent=2)}\n")

    print("Done.")


if __name__ == "__main__":
    main()

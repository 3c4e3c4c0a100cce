###############################################################
# CONFIG - MerkleRootGen.py
#
# Builds the Merkle root for the current whitelist so it can be
# published with setMerkleRoot(root) on the minting contract.
#
# 1. Put the whitelisted addresses in WHITELIST_FILE, either
#    comma separated or one per line.
# 2. Set EPOCH to the epoch (snapshot number) of the whitelist.
# 3. Run: python MerkleRootGen.py
#
# Outputs:
#   merkle_root_epoch_<EPOCH>.txt  - the hex root, one line
#   WHITELIST_META_FILE            - merkleRoot/epoch/count merged in
#   PROOFS_FILE                    - address -> hex proof, for clients
###############################################################

WHITELIST_FILE = "whitelist.txt"
WHITELIST_META_FILE = "whitelist_meta.json"
PROOFS_FILE = "whitelist_proofs.json"
EPOCH = 0

import json
import os

from MerkleTreeWhitelist import EmptyWhitelist, MerkleTreeWhitelist


def load_whitelist(path):
    with open(path, "r") as f:
        content = f.read()
    if "," in content:
        return [a.strip() for a in content.split(",") if a.strip()]
    return [a.strip() for a in content.splitlines() if a.strip()]


def root_file_name(epoch):
    return f"merkle_root_epoch_{epoch}.txt"


def write_root_files(tree, epoch, meta_file=WHITELIST_META_FILE, directory="."):
    """Write the epoch root file and merge the root into the meta json."""
    merkle_root = tree.get_hex_root()
    epoch_root_file = os.path.join(directory, root_file_name(epoch))
    with open(epoch_root_file, "w") as f:
        f.write(merkle_root + "\n")

    meta_path = os.path.join(directory, meta_file)
    meta = {}
    if os.path.exists(meta_path):
        with open(meta_path, "r") as f:
            meta = json.load(f)
    meta["merkleRoot"] = merkle_root
    meta["epoch"] = epoch
    meta["count"] = len(tree)
    with open(meta_path, "w") as f:
        json.dump(meta, f, indent=2)
    return epoch_root_file


def write_proofs_file(tree, addresses, path=PROOFS_FILE):
    proofs = {addr: tree.get_hex_proof(addr) for addr in addresses}
    with open(path, "w") as f:
        json.dump(proofs, f, indent=2)
    return proofs


def main():
    if not os.path.exists(WHITELIST_FILE):
        print(f"[ERROR] Whitelist file {WHITELIST_FILE} not found.")
        raise SystemExit(1)

    addresses = load_whitelist(WHITELIST_FILE)
    print(f"[i] Loaded {len(addresses)} addresses from {WHITELIST_FILE}")

    try:
        tree = MerkleTreeWhitelist(addresses)
    except EmptyWhitelist:
        print("[ERROR] No addresses found in whitelist!")
        raise SystemExit(1)
    except ValueError as e:
        print(f"[ERROR] {e}")
        raise SystemExit(1)

    print("\nMERKLE_ROOT =", tree.get_hex_root())

    epoch_root_file = write_root_files(tree, EPOCH, WHITELIST_META_FILE)
    print(f"Merkle root written to {epoch_root_file} and {WHITELIST_META_FILE}")

    write_proofs_file(tree, addresses, PROOFS_FILE)
    print(f"Proofs for {len(addresses)} addresses written to {PROOFS_FILE}")

    print("\nDone. Publish the root with setMerkleRoot(root).")


if __name__ == "__main__":
    main()

"""Keccak-256 Merkle tree over whitelist addresses.

Pairs are sorted before hashing, so a proof is a plain list of sibling hashes
and can be checked on-chain without left/right flags. Leaves are sorted too,
which makes the root independent of the order of the input list.
"""

from eth_utils import decode_hex, encode_hex, is_hex, keccak


class WhitelistError(Exception):
    pass


class EmptyWhitelist(WhitelistError):
    pass


class EntryNotFound(WhitelistError):
    pass


def to_entry_bytes(entry):
    """Bytes pass through; 0x-prefixed hex strings (any case) are decoded."""
    if isinstance(entry, (bytes, bytearray)):
        return bytes(entry)
    if isinstance(entry, str) and entry.startswith(("0x", "0X")) and is_hex(entry):
        return decode_hex(entry)
    raise ValueError(f"Invalid whitelist entry: {entry!r}")


def hash_leaf(entry):
    return keccak(to_entry_bytes(entry))


def hash_pair(a: bytes, b: bytes):
    if a <= b:
        return keccak(a + b)
    return keccak(b + a)


def get_leaf_nodes(entries):
    return [hash_leaf(e) for e in entries]


def build_layers(leaves):
    """Returns [leaves, layer1, ..., [root]]. An odd node is promoted as-is."""
    layers = [list(leaves)]
    while len(layers[-1]) > 1:
        current = layers[-1]
        next_layer = []
        for i in range(0, len(current), 2):
            if i + 1 < len(current):
                next_layer.append(hash_pair(current[i], current[i + 1]))
            else:
                next_layer.append(current[i])
        layers.append(next_layer)
    return layers


def _as_bytes32(value):
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value)
    else:
        value = decode_hex(value)
    if len(value) != 32:
        raise ValueError(f"Expected 32 bytes, got {len(value)}")
    return value


def verify_merkle_proof(proof, entry, root):
    """Recompute the root from entry and proof and compare it with root.

    Works from (proof, entry, root) alone. Bad input gives False, never an error.
    """
    try:
        current = hash_leaf(entry)
        for sibling in proof:
            current = hash_pair(current, _as_bytes32(sibling))
        return current == _as_bytes32(root)
    except (ValueError, TypeError):
        return False


class MerkleTreeWhitelist:
    def __init__(self, whitelist_addresses):
        leaves = get_leaf_nodes(whitelist_addresses)
        if not leaves:
            raise EmptyWhitelist("Cannot build a Merkle tree from an empty whitelist")
        self.leaves = sorted(leaves)
        self.layers = build_layers(self.leaves)
        self._leaf_index = {}
        for i, leaf in enumerate(self.leaves):
            self._leaf_index.setdefault(leaf, i)

    def __len__(self):
        return len(self.leaves)

    def __contains__(self, entry):
        try:
            return hash_leaf(entry) in self._leaf_index
        except ValueError:
            return False

    def get_root(self) -> bytes:
        return self.layers[-1][0]

    def get_hex_root(self) -> str:
        return encode_hex(self.get_root())

    def get_proof(self, address):
        index = self._leaf_index.get(hash_leaf(address))
        if index is None:
            raise EntryNotFound(f"{address} is not in the whitelist")

        proof = []
        for layer in self.layers[:-1]:
            sibling = index ^ 1
            # no sibling means the node was promoted unpaired at this level
            if sibling < len(layer):
                proof.append(layer[sibling])
            index //= 2
        return proof

    def get_hex_proof(self, address):
        """Proof as 0x-prefixed strings, ready to pass as a bytes32[] argument."""
        return [encode_hex(p) for p in self.get_proof(address)]

    def verify(self, proof, address, root):
        return verify_merkle_proof(proof, address, root)

import heapq
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Hashable, Iterable, Iterator, List, Literal, Sequence, Tuple, Union

Symbol = Hashable
UnmappedPolicy = Literal["skip", "error"]
TruncatedPolicy = Literal["drop", "error"]


# Errors

class HuffmanError(Exception):
    pass

class EmptyAlphabetError(HuffmanError, ValueError):
    def __init__(self):
        super().__init__("cannot build a Huffman tree from an empty alphabet")

class SymbolNotFoundError(HuffmanError, KeyError):
    def __init__(self, symbol):
        super().__init__(f"no code for symbol {symbol!r}")
        self.symbol = symbol

    def __str__(self):  # KeyError would repr() the message
        return self.args[0]

class MalformedInputError(HuffmanError, ValueError):
    def __init__(self, message: str, position: int, bit: str = ""):
        super().__init__(message)
        self.position = position
        self.bit = bit

class TruncatedCodeError(MalformedInputError):
    pass

class SingleSymbolTreeError(HuffmanError, ValueError):
    pass


# Tree nodes

class HuffmanLeaf: # holds exactly one symbol
    is_leaf = True

    def __init__(self, symbol, weight: int):
        self.symbol = symbol
        self.weight = weight

    def __repr__(self):
        return f"HuffmanLeaf({self.symbol!r}, {self.weight})"

class HuffmanInternal: # exactly two children, no symbol of its own
    is_leaf = False

    def __init__(self, left, right):
        self.left = left
        self.right = right
        self.weight = left.weight + right.weight

    def __repr__(self):
        return f"HuffmanInternal({self.left!r}, {self.right!r})"

HuffmanNode = Union[HuffmanLeaf, HuffmanInternal]


def iter_leaves(root: HuffmanNode) -> Iterator[HuffmanLeaf]:
    """Yield the leaves of the tree from left to right."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)


# Frequency counting

def count_frequencies(symbols: Iterable[Symbol]) -> Dict[Symbol, int]:
    """
    Map each distinct symbol to its number of occurrences.
    Entries follow the order of first occurrence; callers should not rely on it.
    """
    return dict(Counter(symbols))


# Tree construction

def _frequency_pairs(frequencies) -> List[Tuple[Symbol, int]]:
    pairs = list(frequencies.items() if isinstance(frequencies, Mapping) else frequencies)
    seen = set()
    for symbol, count in pairs:
        if count < 0:
            raise ValueError(f"negative frequency {count} for symbol {symbol!r}")
        if symbol in seen:
            raise ValueError(f"duplicate symbol {symbol!r} in frequency list")
        seen.add(symbol)
    return pairs

def build_huffman_tree(frequencies) -> HuffmanNode:
    """
    Greedy Huffman construction over a min-heap of (weight, sequence, node).

    frequencies: mapping of symbol -> count, or an iterable of (symbol, count) pairs.

    Ties between equal weights are broken FIFO: leaves are numbered in input
    order and every merged node takes the next number, so the entry pushed
    first is popped first. The first entry popped becomes the left child.
    """
    pairs = _frequency_pairs(frequencies)
    if not pairs:
        raise EmptyAlphabetError()

    priority_queue = [(count, seq, HuffmanLeaf(symbol, count)) for seq, (symbol, count) in enumerate(pairs)]
    heapq.heapify(priority_queue)
    seq = len(priority_queue)

    while len(priority_queue) > 1:
        _, _, left = heapq.heappop(priority_queue)
        _, _, right = heapq.heappop(priority_queue)
        merged = HuffmanInternal(left, right)
        heapq.heappush(priority_queue, (merged.weight, seq, merged))
        seq += 1

    return priority_queue[0][2] # root of the tree; a lone leaf when there is one symbol


# Code table

def generate_huffman_codes(root: HuffmanNode) -> Dict[Symbol, str]:
    """
    Collect every root-to-leaf path in one traversal (left = '0', right = '1').
    A tree made of a single leaf gives that symbol the empty code.
    """
    codes = {}
    stack = [(root, "")]
    while stack:
        node, current_code = stack.pop()
        if node.is_leaf:
            codes[node.symbol] = current_code
            continue
        stack.append((node.right, current_code + "1"))
        stack.append((node.left, current_code + "0"))
    return codes

def find_code(root: HuffmanNode, symbol: Symbol) -> str:
    """Code of a single symbol, searching the tree. Raises SymbolNotFoundError if absent."""
    stack = [(root, "")]
    while stack:
        node, current_code = stack.pop()
        if node.is_leaf:
            if node.symbol == symbol:
                return current_code
            continue
        stack.append((node.right, current_code + "1"))
        stack.append((node.left, current_code + "0"))
    raise SymbolNotFoundError(symbol)

def weighted_code_length(code_map: Dict[Symbol, str], frequencies: Dict[Symbol, int]) -> int:
    return sum(len(code_map[symbol]) * count for symbol, count in frequencies.items())


# Encoding / decoding

def huffman_encode(symbols: Iterable[Symbol], code_map: Dict[Symbol, str],
                   on_unmapped: UnmappedPolicy = "skip") -> str:
    """
    Concatenate the code of each symbol in order.

    on_unmapped="skip" (default) silently drops symbols missing from code_map;
    on_unmapped="error" raises SymbolNotFoundError instead.
    """
    if on_unmapped not in ("skip", "error"):
        raise ValueError(f"on_unmapped must be 'skip' or 'error', not {on_unmapped!r}")

    parts = []
    for symbol in symbols:
        code = code_map.get(symbol)
        if code is None:
            if on_unmapped == "error":
                raise SymbolNotFoundError(symbol)
            continue
        parts.append(code)
    return "".join(parts)

def huffman_decode(bitstring: str, root: HuffmanNode,
                   on_truncated: TruncatedPolicy = "drop") -> List[Symbol]:
    """
    Walk the tree from the root for every symbol, emitting it at each leaf.

    A character other than '0'/'1' raises MalformedInputError at its index.
    An incomplete trailing code is discarded with on_truncated="drop" (default)
    or raises TruncatedCodeError with on_truncated="error".
    """
    if on_truncated not in ("drop", "error"):
        raise ValueError(f"on_truncated must be 'drop' or 'error', not {on_truncated!r}")

    if root.is_leaf:
        for position, bit in enumerate(bitstring):
            if bit not in "01":
                raise MalformedInputError(f"invalid bit {bit!r} at position {position}", position, bit)
        if bitstring:
            raise SingleSymbolTreeError(
                f"cannot decode {len(bitstring)} bits with a single-symbol tree: "
                f"{root.symbol!r} has an empty code")
        return []

    decoded = []
    node = root
    code_start = 0
    for position, bit in enumerate(bitstring):
        if bit == "0":
            node = node.left
        elif bit == "1":
            node = node.right
        else:
            raise MalformedInputError(f"invalid bit {bit!r} at position {position}", position, bit)

        if node.is_leaf:
            decoded.append(node.symbol)
            node = root # restart for the next symbol
            code_start = position + 1

    if node is not root and on_truncated == "error":
        raise TruncatedCodeError(
            f"incomplete code {bitstring[code_start:]!r} at position {code_start}", code_start)
    return decoded


# Composed entry points

def build_code(symbols: Iterable[Symbol]) -> Dict[Symbol, str]:
    """Frequency count + tree build + table derivation."""
    return generate_huffman_codes(build_huffman_tree(count_frequencies(symbols)))


@dataclass(frozen=True)
class HuffmanCoding:
    """Frequencies, tree and code table built once for one input; read-only afterwards."""
    frequencies: Mapping
    root: HuffmanNode
    codes: Mapping

    def __post_init__(self):
        object.__setattr__(self, "frequencies", MappingProxyType(dict(self.frequencies)))
        object.__setattr__(self, "codes", MappingProxyType(dict(self.codes)))

    @classmethod
    def from_frequencies(cls, frequencies) -> "HuffmanCoding":
        frequencies = dict(_frequency_pairs(frequencies))
        root = build_huffman_tree(frequencies)
        return cls(frequencies, root, generate_huffman_codes(root))

    @classmethod
    def from_symbols(cls, symbols: Sequence[Symbol]) -> "HuffmanCoding":
        return cls.from_frequencies(count_frequencies(symbols))

    @property
    def is_degenerate(self) -> bool:
        return self.root.is_leaf

    def code_for(self, symbol: Symbol) -> str:
        try:
            return self.codes[symbol]
        except KeyError:
            raise SymbolNotFoundError(symbol) from None

    def encode(self, symbols: Iterable[Symbol], on_unmapped: UnmappedPolicy = "skip") -> str:
        return huffman_encode(symbols, self.codes, on_unmapped=on_unmapped)

    def decode(self, bitstring: str, on_truncated: TruncatedPolicy = "drop") -> List[Symbol]:
        return huffman_decode(bitstring, self.root, on_truncated=on_truncated)

    def weighted_length(self) -> int:
        return weighted_code_length(self.codes, self.frequencies)

    def average_code_length(self) -> float:
        total = sum(self.frequencies.values())
        return self.weighted_length() / max(1, total)

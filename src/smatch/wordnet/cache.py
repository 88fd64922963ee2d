"""Flat relation caches built from WordNet ``data.*`` files.

Each relation cache is a sorted array of signed 64-bit keys, one per synset
pair, with ``key = source_offset << 32 | target_offset``. Membership checks are
binary searches, so the oracle never has to walk the dictionary at match time.
Hypernym caches hold the transitive closure. The multiword index is JSON and
maps the first word of every multiword lemma to the full lemmas.
"""

from __future__ import annotations

import json
import tomllib
from array import array
from bisect import bisect_left
from collections import defaultdict
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from smatch.domain.errors import SMatchError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

log = getLogger(__name__)

ARRAY_TYPECODE: Final[str] = "q"
_OFFSET_BITS: Final[int] = 32

DATA_FILES: Final[dict[str, str]] = {
    "n": "data.noun",
    "v": "data.verb",
    "a": "data.adj",
    "r": "data.adv",
}

ANTONYM: Final[str] = "!"
HYPERNYMS: Final[frozenset[str]] = frozenset({"@", "@i"})
SIMILAR_TO: Final[str] = "&"
DERIVATION: Final[str] = "+"


class WordNetCacheError(SMatchError):
    """Raised when dictionary resources are missing or malformed."""


@dataclass(frozen=True, slots=True)
class Pointer:
    symbol: str
    offset: int
    pos: str


@dataclass(slots=True)
class Synset:
    offset: int
    pos: str
    lemmas: list[str] = field(default_factory=list)
    pointers: list[Pointer] = field(default_factory=list)


def _normalize_pos(pos: str) -> str:
    # adjective satellites share the adjective data file
    return "a" if pos == "s" else pos


def parse_data_line(line: str) -> Synset:
    """Parse one synset line of a WordNet data file (gloss excluded)."""

    fields = line.split(" | ", 1)[0].split()
    try:
        offset = int(fields[0])
        pos = _normalize_pos(fields[2])
        word_count = int(fields[3], 16)
        cursor = 4
        lemmas = [fields[cursor + 2 * index] for index in range(word_count)]
        cursor += 2 * word_count
        pointer_count = int(fields[cursor])
        cursor += 1
        pointers = [
            Pointer(
                symbol=fields[cursor + 4 * index],
                offset=int(fields[cursor + 4 * index + 1]),
                pos=_normalize_pos(fields[cursor + 4 * index + 2]),
            )
            for index in range(pointer_count)
        ]
    except (IndexError, ValueError) as exc:
        raise WordNetCacheError(f"Malformed synset line: {line[:60]!r}") from exc
    return Synset(offset=offset, pos=pos, lemmas=lemmas, pointers=pointers)


def read_data_file(path: Path) -> Iterator[Synset]:
    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            for line in handle:
                # license header lines start with two spaces
                if not line.strip() or line.startswith("  "):
                    continue
                yield parse_data_line(line)
    except FileNotFoundError as exc:
        raise WordNetCacheError(f"WordNet data file not found: {path}") from exc


def pair_key(source: int, target: int) -> int:
    return (source << _OFFSET_BITS) | target


def _pairs(
    synsets: Iterable[Synset], symbols: frozenset[str], target_pos: str
) -> set[tuple[int, int]]:
    return {
        (synset.offset, pointer.offset)
        for synset in synsets
        for pointer in synset.pointers
        if pointer.symbol in symbols and pointer.pos == target_pos
    }


def transitive_closure(pairs: set[tuple[int, int]]) -> set[tuple[int, int]]:
    """Close ``child -> parent`` pairs under transitivity."""

    parents: dict[int, set[int]] = defaultdict(set)
    for child, parent in pairs:
        parents[child].add(parent)

    closed: set[tuple[int, int]] = set()
    for node in list(parents):
        seen: set[int] = set()
        pending = list(parents[node])
        while pending:
            ancestor = pending.pop()
            if ancestor in seen:
                continue
            seen.add(ancestor)
            pending.extend(parents.get(ancestor, ()))
        closed.update((node, ancestor) for ancestor in seen)
    return closed


def write_relation_cache(path: Path, pairs: Iterable[tuple[int, int]]) -> int:
    keys = array(ARRAY_TYPECODE, sorted({pair_key(source, target) for source, target in pairs}))
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as handle:
        keys.tofile(handle)
    log.info("Wrote %d relations to %s", len(keys), path)
    return len(keys)


@dataclass(frozen=True, slots=True)
class RelationCache:
    """Read side of a relation cache."""

    keys: array[int]

    @classmethod
    def load(cls, path: str | Path) -> RelationCache:
        data = Path(path).read_bytes()
        keys = array(ARRAY_TYPECODE)
        if len(data) % keys.itemsize:
            raise WordNetCacheError(f"Relation cache {path} is truncated")
        keys.frombytes(data)
        return cls(keys=keys)

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        key = pair_key(*pair)
        index = bisect_left(self.keys, key)
        return index < len(self.keys) and self.keys[index] == key

    def __len__(self) -> int:
        return len(self.keys)


def load_multiwords(path: str | Path) -> dict[str, list[str]]:
    with Path(path).open(encoding="utf-8") as handle:
        return json.load(handle)


def _dictionary_path(properties_path: Path) -> Path:
    try:
        with properties_path.open("rb") as handle:
            document = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise WordNetCacheError(f"WordNet properties file not found: {properties_path}") from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise WordNetCacheError(f"Malformed WordNet properties {properties_path}: {exc}") from exc

    section = document.get("wordnet")
    raw = section.get("dictionary_path") if isinstance(section, dict) else None
    if not isinstance(raw, str) or not raw.strip():
        raise WordNetCacheError(f"{properties_path} does not define [wordnet] dictionary_path")
    dictionary = Path(raw).expanduser()
    if not dictionary.is_absolute():
        dictionary = properties_path.parent / dictionary
    if not dictionary.is_dir():
        raise WordNetCacheError(f"WordNet dictionary directory not found: {dictionary}")
    return dictionary


def _multiword_index(synsets: Iterable[Synset]) -> dict[str, list[str]]:
    index: dict[str, set[str]] = defaultdict(set)
    for synset in synsets:
        for lemma in synset.lemmas:
            # adjective lemmas may carry a syntactic marker such as "(a)"
            words = lemma.split("(", 1)[0].lower().split("_")
            if len(words) > 1:
                index[words[0]].add(" ".join(words))
    return {first: sorted(expressions) for first, expressions in sorted(index.items())}


def create_wordnet_caches(
    properties: str,
    adjective_synonyms: str,
    adjective_antonyms: str,
    noun_hypernyms: str,
    noun_antonyms: str,
    adverb_antonyms: str,
    verb_hypernyms: str,
    nominalizations: str,
    multiwords: str,
) -> None:
    """Build every cache file from the dictionary named in ``properties``."""

    dictionary = _dictionary_path(Path(properties))
    log.info("Reading WordNet dictionary from %s", dictionary)
    synsets = {pos: list(read_data_file(dictionary / name)) for pos, name in DATA_FILES.items()}
    antonym = frozenset({ANTONYM})

    write_relation_cache(
        Path(adjective_synonyms), _pairs(synsets["a"], frozenset({SIMILAR_TO}), "a")
    )
    write_relation_cache(Path(adjective_antonyms), _pairs(synsets["a"], antonym, "a"))
    write_relation_cache(
        Path(noun_hypernyms), transitive_closure(_pairs(synsets["n"], HYPERNYMS, "n"))
    )
    write_relation_cache(Path(noun_antonyms), _pairs(synsets["n"], antonym, "n"))
    write_relation_cache(Path(adverb_antonyms), _pairs(synsets["r"], antonym, "r"))
    write_relation_cache(
        Path(verb_hypernyms), transitive_closure(_pairs(synsets["v"], HYPERNYMS, "v"))
    )
    write_relation_cache(
        Path(nominalizations), _pairs(synsets["n"], frozenset({DERIVATION}), "v")
    )

    index = _multiword_index(synset for group in synsets.values() for synset in group)
    multiword_path = Path(multiwords)
    multiword_path.parent.mkdir(parents=True, exist_ok=True)
    with multiword_path.open("w", encoding="utf-8") as handle:
        json.dump(index, handle, indent=1, sort_keys=True)
    log.info("Wrote %d multiword entries to %s", len(index), multiword_path)

# model/sequence_search.py

from bisect import bisect_right
from typing import List, Sequence


def _fold_char(ch: str) -> str:
    upper = ch.upper()
    # "ß" → "SS" gibi uzunluk değiştiren dönüşümler offset'leri kaydırır
    return upper if len(upper) == 1 else ch


def fold_case(text: str) -> str:
    """
    Karakter karakter büyük harfe çevirir; sonuç her zaman girdiyle aynı
    uzunluktadır, offset'ler ham sekansla hizalı kalır.
    """
    return "".join(_fold_char(ch) for ch in text)


def find_matches(sequence: str, query: str) -> List[int]:
    """
    Sorgunun sekans içindeki tüm başlangıç offset'lerini (0-based) döner.

    - Büyük/küçük harf duyarsız
    - Örtüşen eşleşmeler de raporlanır ("AA" / "AAA" → [0, 1])
    - Boş sorgu → boş liste
    """
    if not query:
        return []

    haystack = fold_case(sequence)
    needle = fold_case(query)

    matches: List[int] = []
    pos = haystack.find(needle)
    while pos != -1:
        matches.append(pos)
        # Bir sonraki karakterden devam → örtüşenleri de yakalar
        pos = haystack.find(needle, pos + 1)
    return matches


def is_match_position(matches: Sequence[int], query_length: int, offset: int) -> bool:
    """
    offset, herhangi bir eşleşmenin [m, m + query_length) aralığında mı?

    matches artan sırada olmalı. Tüm eşleşmeler aynı uzunlukta olduğu için
    offset'ten küçük/eşit en büyük başlangıca bakmak yeterli.
    """
    if query_length <= 0 or not matches:
        return False

    idx = bisect_right(matches, offset) - 1
    if idx < 0:
        return False
    return offset < matches[idx] + query_length


def match_flags(
    matches: Sequence[int],
    query_length: int,
    start: int,
    end: int,
) -> List[bool]:
    """
    [start, end) penceresindeki her offset için highlight bayrağı üretir.
    """
    return [is_match_position(matches, query_length, offset) for offset in range(start, end)]

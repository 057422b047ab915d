# highlights/similarity.py


def distance(a: str, b: str) -> int:
    """
    Return the Levenshtein edit distance between a and b (case-sensitive).
    """
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(
                    1 + min(previous[j - 1], previous[j], current[j - 1])
                )
        previous = current
    return previous[-1]


def same(a: str, b: str) -> bool:
    return a.lower() == b.lower()


def contains(a: str, b: str) -> bool:
    """
    True if either lowercased string is a substring of the other.

    An empty operand is contained in everything, so contains("", x) is True.
    """
    la, lb = a.lower(), b.lower()
    return la in lb or lb in la


def tags_similar(a: str, b: str, threshold: int = 3) -> bool:
    if same(a, b):
        return True
    if contains(a, b):
        return True
    return distance(a.lower(), b.lower()) <= threshold

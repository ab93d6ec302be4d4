"""Make caller-supplied titles unique before they are submitted."""


def deduplicate_titles(titles: list[str]) -> list[str]:
    """Suffix repeated titles so every non-blank title is distinct.

    The first occurrence keeps its (trimmed) title. The n-th occurrence
    becomes ``"{title} ({n})"``, so the second "A" is "A (2)". A suffix that
    would collide with a title already in the list moves on to the next
    free number. Blank titles pass through untouched.

    Applying this to its own output returns it unchanged.
    """
    taken = {t.strip() for t in titles if t and t.strip()}
    occurrences: dict[str, int] = {}
    emitted: set[str] = set()
    result: list[str] = []

    for title in titles:
        trimmed = title.strip() if title else ""
        if not trimmed:
            result.append(title)
            continue

        occurrences[trimmed] = occurrences.get(trimmed, 0) + 1
        if trimmed not in emitted:
            emitted.add(trimmed)
            result.append(trimmed)
            continue

        n = occurrences[trimmed]
        candidate = f"{trimmed} ({n})"
        while candidate in taken or candidate in emitted:
            n += 1
            candidate = f"{trimmed} ({n})"
        taken.add(candidate)
        emitted.add(candidate)
        result.append(candidate)

    return result

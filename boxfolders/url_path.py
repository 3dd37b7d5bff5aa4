import urllib.parse


def url_path(*segments) -> str:
    """
    Joins path segments into an API path, escaping each segment completely.

    Leading and trailing slashes on a segment are ignored, so
    url_path("/folders", "12", "/items") gives "/folders/12/items".
    A slash inside a segment (e.g. an ID) is escaped rather than treated as a separator.
    """
    parts = []
    for segment in segments:
        segment = str(segment)
        if segment.startswith("/"):
            segment = segment[1:]
        if segment.endswith("/"):
            segment = segment[:-1]
        if segment:
            parts.append(urllib.parse.quote(segment, safe=""))
    return "/" + "/".join(parts)

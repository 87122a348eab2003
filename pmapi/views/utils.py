def sparse_payload(data, allowed_fields):
    """Whitelist ``allowed_fields`` from a request body, dropping blank values.

    Blank means anything falsy (missing, ``None``, ``""``, ``0``), so server
    defaults apply instead of empty strings being written.
    """
    payload = {}
    for field in allowed_fields:
        value = data.get(field)
        if isinstance(value, str):
            value = value.strip()
        if value:
            payload[field] = value
    return payload


def parse_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None

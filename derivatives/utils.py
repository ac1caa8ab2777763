from nanoid import generate

from derivatives.service.constants import BASE_NAME_ALPHABET, BASE_NAME_SIZE


def generate_base_name(size=None):
    """
    Generate a unique base name for an upload.

    The base name names the stored original and prefixes every derivative
    written for it, so two uploads never share output paths.

    Args:
        size: Number of characters (default BASE_NAME_SIZE)

    Returns:
        A random lowercase hex string
    """
    return generate(BASE_NAME_ALPHABET, size=size or BASE_NAME_SIZE)


def format_record(record):
    """Render a derivative record as aligned 'field: value' lines."""
    data = record.to_dict()
    width = max(len(key) for key in data)
    return '\n'.join(f'{key.ljust(width)}: {value}' for key, value in data.items())

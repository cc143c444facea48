DEBUG_MODE = False  # Quiet by default; front ends enable it with --debug


def set_debug(value):
    """
    Turn instruction tracing on or off

    Args:
        value (bool): True to print trace lines, False to silence them
    """
    global DEBUG_MODE
    DEBUG_MODE = value


def debug_print(text):
    """
    Prints a trace line when debug mode is enabled.

    Args:
        text (str): The line to print.
    """
    if DEBUG_MODE:
        print(text)


def format_word(word):
    """Render a 16-bit instruction word the way traces and faults show it"""
    return f"0x{word & 0xFFFF:04X}"

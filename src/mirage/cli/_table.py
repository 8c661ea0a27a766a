"""Plain-text table output shared by the listing commands."""


def print_table(headers: tuple[str, ...], rows: list[tuple[str, ...]]) -> None:
    """Print *rows* under *headers*, padding every column but the last."""
    widths = [
        max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(len(headers) - 1)
    ]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths) + "  {}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 2 * len(widths) + max(len(row[-1]) for row in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))

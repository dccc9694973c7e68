from typing import Iterable, List, Literal, NamedTuple, Optional

from db.models import CartLine, Product

FREE_SHIPPING_THRESHOLD = 100.0
SHIPPING_FEE = 10.0


class CartSummary(NamedTuple):
    subtotal: float
    shipping: float
    total: float
    item_count: int
    free_shipping_remaining: float


def cart_summary(cart: Iterable[CartLine]) -> CartSummary:
    """
    Totals shown under the cart.

    Subtotals at or above FREE_SHIPPING_THRESHOLD ship free, anything below
    pays SHIPPING_FEE. An empty cart has nothing to ship.
    """
    lines = list(cart)
    subtotal = round(sum(line.line_total for line in lines), 2)
    item_count = sum(line.quantity for line in lines)

    if not lines or subtotal >= FREE_SHIPPING_THRESHOLD:
        shipping = 0.0
    else:
        shipping = SHIPPING_FEE

    remaining = round(max(FREE_SHIPPING_THRESHOLD - subtotal, 0.0), 2)
    return CartSummary(
        subtotal=subtotal,
        shipping=shipping,
        total=round(subtotal + shipping, 2),
        item_count=item_count,
        free_shipping_remaining=remaining,
    )


def discount_percentage(product: Product) -> int:
    """Whole percent saved against original_price, 0 if there is none."""
    if not product.original_price or product.original_price <= product.price:
        return 0
    return round((product.original_price - product.price) / product.original_price * 100)


def format_price(amount: float) -> str:
    return f"${amount:.2f}"


def generate_markdown_table(
    headers: Optional[List[str]],
    rows: List[List[str]],
    aligns: Optional[List[Literal["l", "c", "r"]]] = None,
) -> str:
    """
    Generate a Markdown table.

    Args:
        headers: List of column headers, or None to use first row as headers.
        rows: List of rows, each a list of strings.
        aligns: List of alignments ('l', 'c', 'r') for each column.
                Defaults to all center ('c').

    Returns:
        str: Markdown formatted table.
    """
    if not rows:
        return ""

    if not headers:
        headers, rows = rows[0], rows[1:]

    headers = list(map(str, headers))
    rows = [list(map(str, row)) for row in rows]

    num_cols = len(headers)
    if aligns is None:
        aligns = ["c"] * num_cols
    elif len(aligns) != num_cols:
        raise ValueError("Length of aligns must match number of headers.")

    align_map = {
        "l": ":---",
        "c": ":---:",
        "r": "---:",
    }

    header_line = "| " + " | ".join(headers) + " |"
    align_line = "| " + " | ".join(align_map[a] for a in aligns) + " |"
    row_lines = ["| " + " | ".join(row) + " |" for row in rows]

    return "\n".join([header_line, align_line, *row_lines])

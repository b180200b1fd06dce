"""Utility for generating HTML tables."""


def html_table(headers: list[str], rows: list[list[str]], css_class: str = "") -> str:
    """Generate an HTML table; cells are inserted as given (already markup)."""
    if not rows:
        return ""
    attr = f' class="{css_class}"' if css_class else ""
    out = [
        f"<table{attr}>",
        "<tr>" + "".join(f"<th>{h}</th>" for h in headers) + "</tr>",
    ]
    out.extend("<tr>" + "".join(f"<td>{c}</td>" for c in r) + "</tr>" for r in rows)
    out.append("</table>")
    return "\n".join(out)

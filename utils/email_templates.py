"""HTML bodies for customer and admin notifications (German, like the calendar UI)."""
from markupsafe import escape

_WRAP_OPEN = '<div style="font-family:Arial,sans-serif;max-width:640px;margin:0 auto">'
_CELL = "padding:6px 10px;border:1px solid #e5e7eb"


def _row(label: str, value) -> str:
    shown = "–" if value in (None, "") else value
    return (
        f'<tr><td style="{_CELL}"><b>{escape(label)}</b></td>'
        f'<td style="{_CELL}">{escape(shown)}</td></tr>'
    )


def _details_table(data: dict, extra_rows=()) -> str:
    rows = [
        _row("Datum", data.get("date")),
        _row("Uhrzeit", data.get("time")),
        _row("Dauer", f"{data.get('duration')} Min."),
        _row("Name", data.get("full_name")),
        _row("E-Mail", data.get("email")),
        _row("Telefon", data.get("phone")),
        _row("Adresse", data.get("address")),
        _row("PLZ", data.get("postal_code")),
        _row("Stadt", data.get("city")),
    ]
    if data.get("unit_count") is not None:
        rows.append(_row("Einheiten", data.get("unit_count")))
    rows.append(_row("Notiz", data.get("note")))
    rows.extend(extra_rows)
    return (
        '<table style="border-collapse:collapse;border:1px solid #e5e7eb;width:100%;margin:8px 0">'
        + "".join(rows)
        + "</table>"
    )


def _footer(brand: str) -> str:
    return (
        '<p style="color:#666;font-size:12px">Falls Sie Rückfragen haben, antworten Sie bitte auf diese E-Mail.</p>'
        f'<p style="color:#666;font-size:12px">{escape(brand)}</p></div>'
    )


def _head(brand: str, title: str, lead: str) -> str:
    return (
        _WRAP_OPEN
        + f'<h2 style="margin:0 0 8px">{escape(brand)} – {escape(title)}</h2>'
        + f'<p style="color:#555;margin:0 0 16px">{escape(lead)}</p>'
    )


def booking_emails(brand: str, data: dict) -> dict:
    """Returns subject plus customer and admin bodies for a new booking."""
    subject = f"Terminbestätigung – {data.get('date')} {data.get('time')}"
    table = _details_table(data)
    return {
        "subject": subject,
        "admin_subject": f"Neue Buchung – {subject}",
        "html_customer": _head(brand, "Terminbestätigung", "Vielen Dank für Ihre Buchung!") + table + _footer(brand),
        "html_admin": _head(brand, "Neue Buchung", "Ein Kunde hat soeben einen Termin gebucht.") + table + _footer(brand),
    }


def cancellation_emails(brand: str, data: dict) -> dict:
    subject = f"Terminstornierung – {data.get('date')} {data.get('time')}"
    table = _details_table(data, extra_rows=[_row("Grund", data.get("reason"))])
    return {
        "subject": subject,
        "admin_subject": f"Storno ({data.get('canceled_by')}) – {subject}",
        "html_customer": _head(brand, "Terminstornierung", "Ihr Termin wurde leider storniert.") + table + _footer(brand),
        "html_admin": _head(brand, "Storno", "Ein Termin wurde storniert.") + table + _footer(brand),
    }

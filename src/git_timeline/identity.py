from __future__ import annotations


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_name(name: str) -> str:
    return " ".join(name.split())


def author_label(email: str, name: str = "") -> str:
    e = normalize_email(email)
    n = normalize_name(name)
    if e and n:
        return f"{e} ({n})"
    return e or n or "all authors"

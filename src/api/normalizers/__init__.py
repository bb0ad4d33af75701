"""Normalizers — conversão de conteúdo do host para o snapshot.

Estrutura:
- email/: corpo HTML da mensagem → texto
"""

from .email import extract_body, normalize_html

__all__ = [
    "extract_body",
    "normalize_html",
]

"""Normalização do corpo HTML do item para texto de classificação.

Passos, nesta ordem:
1. Remove o bloco <head>...</head>
2. Remove comentários condicionais de editores legados
   (<!--[if gte mso 9]> ... <![endif]-->)
3. Se existir <body>, mantém apenas o conteúdo interno; senão usa tudo
4. Remove todas as tags restantes numa única passada genérica

Entidades HTML (ex: &nbsp;) NÃO são decodificadas e espaços não são
aparados: o agente espera o texto literal como sempre foi enviado.
"""

from __future__ import annotations

import re
from re import Pattern
from typing import Final

_HEAD_BLOCK: Final[Pattern[str]] = re.compile(r"<head\b[^>]*>[\s\S]*?</head\s*>", re.IGNORECASE)
_CONDITIONAL_COMMENT: Final[Pattern[str]] = re.compile(
    r"<!--\s*\[if[\s\S]*?<!\s*\[endif\]\s*-->", re.IGNORECASE
)
_BODY_CONTENT: Final[Pattern[str]] = re.compile(r"<body[^>]*>([\s\S]*?)</body>", re.IGNORECASE)
_ANY_TAG: Final[Pattern[str]] = re.compile(r"<[^>]+>")


def extract_body(html: str) -> str:
    """Remove head e comentários condicionais; isola o conteúdo do body.

    Args:
        html: HTML renderizado pelo host

    Returns:
        Conteúdo interno do <body>, ou o HTML limpo inteiro se não houver body
    """
    cleaned = _HEAD_BLOCK.sub("", html)
    cleaned = _CONDITIONAL_COMMENT.sub("", cleaned)
    match = _BODY_CONTENT.search(cleaned)
    if match is not None:
        return match.group(1)
    return cleaned


def normalize_html(html: str) -> str:
    """Converte HTML em texto puro (determinístico, sem efeitos colaterais).

    Exemplos:
        >>> normalize_html("<html><head>X</head><body>Hello<br>World</body></html>")
        'HelloWorld'

        >>> normalize_html("<p>a&nbsp;b</p>")
        'a&nbsp;b'
    """
    if not html:
        return ""
    return _ANY_TAG.sub("", extract_body(html))

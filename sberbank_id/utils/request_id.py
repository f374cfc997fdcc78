"""
Generador de identificadores de petición (RqUID) para el gateway de Sberbank.
"""

import random

REQUEST_ID_CHARSET = "abcdefABCDEF0123456789"
REQUEST_ID_LENGTH = 32


def generate_request_id() -> str:
    """
    Genera un identificador de mensaje con patrón ``([0-9]|[a-f]|[A-F]){32}``.

    Usa ``random`` (no criptográfico): el RqUID solo sirve para trazar
    peticiones con el proveedor, no es un secreto.
    """
    return "".join(random.choice(REQUEST_ID_CHARSET) for _ in range(REQUEST_ID_LENGTH))

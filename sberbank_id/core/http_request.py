"""
Cliente HTTP asíncrono usando aiohttp para hablar con el gateway de Sberbank.
Proporciona una interfaz limpia y reutilizable para realizar peticiones HTTP.
"""

import aiohttp
import json
import logging
from typing import Dict, Any, Optional, Union

logger = logging.getLogger(__name__)


class ResponseWrapper:
    """
    Respuesta ya leída por completo, válida después de cerrar la sesión.
    """

    def __init__(self, status: int, headers, content: bytes):
        self.status = status
        self.headers = headers
        self._content = content

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    async def text(self) -> str:
        return self._content.decode('utf-8')

    async def read(self) -> bytes:
        return self._content

    async def json(self) -> Any:
        return json.loads(self._content.decode('utf-8'))


class HTTPClient:
    """
    Cliente HTTP asíncrono ligado a un gateway.

    Características:
    - URL base concatenada con rutas relativas (el gateway incluye prefijo de ruta)
    - Timeout total por petición
    - Headers por defecto combinados con headers de cada petición
    - Una sesión aiohttp por petición, sin estado compartido entre instancias
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 30,
        default_headers: Optional[Dict[str, str]] = None
    ):
        """
        Inicializa el cliente HTTP.

        Args:
            base_url: URL base para todas las peticiones (opcional)
            timeout: Timeout por defecto en segundos
            default_headers: Headers que se incluirán en todas las peticiones
        """
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.default_headers = dict(default_headers or {})

    def _build_url(self, url: str) -> str:
        """
        Construye la URL completa combinando base_url con la URL relativa.

        A diferencia de urljoin, conserva la ruta de base_url
        (``https://host/ru/prod`` + ``/tokens`` -> ``https://host/ru/prod/tokens``).

        Args:
            url: URL relativa o absoluta

        Returns:
            URL completa
        """
        if self.base_url and not url.startswith(('http://', 'https://')):
            return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        return url

    def _merge_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        """
        Combina headers por defecto con headers específicos de la petición.

        Args:
            headers: Headers específicos de la petición

        Returns:
            Headers combinados
        """
        merged = self.default_headers.copy()
        if headers:
            merged.update(headers)
        return merged

    async def _make_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Union[Dict[str, Any], str, bytes]] = None,
        **kwargs
    ) -> ResponseWrapper:
        """
        Realiza una petición HTTP genérica.

        Args:
            method: Método HTTP (GET, POST)
            url: URL de destino
            headers: Headers de la petición
            params: Parámetros de query string
            data: Datos del cuerpo (raw o formulario)
            **kwargs: Argumentos adicionales para aiohttp

        Returns:
            ResponseWrapper con los datos de la respuesta

        Raises:
            aiohttp.ClientError: Si ocurre un error en la petición
            asyncio.TimeoutError: Si se supera el timeout
        """
        full_url = self._build_url(url)
        merged_headers = self._merge_headers(headers)

        logger.debug(f"{method} {full_url}")

        async with aiohttp.ClientSession(
            timeout=self.timeout,
            headers=merged_headers
        ) as session:
            async with session.request(
                method=method,
                url=full_url,
                params=params,
                data=data,
                **kwargs
            ) as response:
                # Leer el contenido antes de que se cierre la conexión
                content = await response.read()
                logger.debug(f"{method} {full_url} -> {response.status}")
                return ResponseWrapper(response.status, response.headers, content)

    async def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> ResponseWrapper:
        """
        Realiza una petición GET.

        Args:
            url: URL de destino
            headers: Headers adicionales
            params: Parámetros de query string
            **kwargs: Argumentos adicionales

        Returns:
            Respuesta HTTP
        """
        return await self._make_request('GET', url, headers, params, **kwargs)

    async def post(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Union[Dict[str, Any], str, bytes]] = None,
        **kwargs
    ) -> ResponseWrapper:
        """
        Realiza una petición POST.

        Args:
            url: URL de destino
            headers: Headers adicionales
            params: Parámetros de query string
            data: Datos del cuerpo (form-urlencoded ya serializado o dict)
            **kwargs: Argumentos adicionales

        Returns:
            Respuesta HTTP
        """
        return await self._make_request('POST', url, headers, params, data, **kwargs)

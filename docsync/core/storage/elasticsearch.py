"""
Elasticsearch storage client

Index management and bulk writes against the search engine
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union
from urllib.parse import urlparse

from elasticsearch import ApiError, AsyncElasticsearch, NotFoundError, TransportError

from docsync.core.config import Settings, get_settings
from docsync.exceptions import StorageError
from docsync.utils import get_logger

logger = get_logger("storage.elasticsearch")


def _body(response: Any) -> Any:
    """Unwrap an ObjectApiResponse, pass plain values through"""
    return getattr(response, "body", response)


@dataclass
class ESConfig:
    """ES client configuration"""

    hosts: Union[str, List[str]]
    username: Optional[str] = None
    password: Optional[str] = None
    scheme: str = "http"
    timeout: int = 30
    max_retries: int = 0
    verify_certs: bool = False

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ESConfig":
        """Build the configuration from application settings"""
        settings = settings or get_settings()
        return cls(
            hosts=f"{settings.es_host}:{settings.es_port}",
            username=settings.es_username,
            password=settings.es_password,
            scheme=settings.es_scheme,
            timeout=settings.es_timeout,
            max_retries=settings.es_max_retries,
            verify_certs=settings.es_verify_certs,
        )

    def host_urls(self, with_auth: bool = True) -> List[str]:
        """Full host URLs with scheme and, when configured, credentials"""
        raw_hosts = self.hosts if isinstance(self.hosts, list) else [self.hosts]

        urls = []
        for host in raw_hosts:
            if not host.startswith("http://") and not host.startswith("https://"):
                host = f"{self.scheme}://{host}"
            if with_auth and self.username and self.password:
                parsed = urlparse(host)
                host = f"{parsed.scheme}://{self.username}:{self.password}@{parsed.netloc}{parsed.path}"
            urls.append(host)
        return urls


class ElasticsearchClient:
    """Async Elasticsearch client used by the index lifecycle and sync layers"""

    def __init__(
        self,
        config: Optional[ESConfig] = None,
        client: Optional[AsyncElasticsearch] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the client

        Args:
            config: ES configuration (defaults to the application settings)
            client: an existing AsyncElasticsearch instance to wrap
            **kwargs: extra AsyncElasticsearch options
        """
        if client is not None:
            self.client = client
            self.hosts: List[str] = []
            return

        config = config or ESConfig.from_settings()
        self.hosts = config.host_urls(with_auth=False)

        client_config: Dict[str, Any] = {
            "hosts": config.host_urls(),
            "request_timeout": config.timeout,
            "max_retries": config.max_retries,
            "retry_on_timeout": False,
            **kwargs,
        }
        # TLS options are only accepted for https nodes
        if any(host.startswith("https://") for host in self.hosts):
            client_config["verify_certs"] = config.verify_certs

        self.client = AsyncElasticsearch(**client_config)

        logger.info("Elasticsearch client initialized", extra={"hosts": self.hosts})

    async def index_exists(self, index: str) -> bool:
        """
        Probe the index status

        Args:
            index: index name

        Returns:
            True if the index answered without an error marker

        Raises:
            StorageError: the search engine could not be reached
        """
        try:
            response = await self.client.indices.stats(index=index)
        except NotFoundError:
            return False
        except ApiError as e:
            logger.debug(f"Status probe for {index} returned an error: {e}")
            return False
        except TransportError as e:
            logger.error(f"Status probe for {index} failed: {e}")
            raise StorageError(f"Status probe for {index} failed: {e}") from e

        body = _body(response)
        return not (isinstance(body, dict) and "error" in body)

    async def create_index(
        self,
        index: str,
        mappings: Dict[str, Any],
        settings: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Create an index

        Args:
            index: index name
            mappings: merged mapping document
            settings: index settings

        Returns:
            the engine's response body

        Raises:
            StorageError: creation failed
        """
        try:
            response = await self.client.indices.create(
                index=index,
                mappings=mappings,
                settings=settings or None,
            )
        except (ApiError, TransportError) as e:
            logger.error(f"Creating index {index} failed: {e}", exc_info=True)
            raise StorageError(f"Creating index {index} failed: {e}") from e

        return _body(response)

    async def delete_index(self, index: str) -> bool:
        """
        Delete an index

        Args:
            index: index name

        Returns:
            True if deleted, False if it did not exist

        Raises:
            StorageError: deletion failed
        """
        try:
            await self.client.indices.delete(index=index)
        except NotFoundError:
            return False
        except (ApiError, TransportError) as e:
            logger.error(f"Deleting index {index} failed: {e}", exc_info=True)
            raise StorageError(f"Deleting index {index} failed: {e}") from e

        return True

    async def refresh_index(self, index: str) -> Dict[str, Any]:
        """
        Refresh an index so new documents become searchable

        Raises:
            StorageError: refresh failed
        """
        try:
            response = await self.client.indices.refresh(index=index)
        except (ApiError, TransportError) as e:
            logger.error(f"Refreshing index {index} failed: {e}", exc_info=True)
            raise StorageError(f"Refreshing index {index} failed: {e}") from e

        return _body(response)

    async def bulk(self, operations: Sequence[str]) -> Dict[str, Any]:
        """
        Submit a bulk payload

        Args:
            operations: pre-serialized NDJSON lines, action and document alternating

        Returns:
            the engine's response body; error responses are returned, not raised,
            so the caller can inspect the error marker

        Raises:
            StorageError: the request never got a response
        """
        try:
            response = await self.client.bulk(operations=list(operations))
        except ApiError as e:
            logger.error(f"Bulk request rejected: {e}")
            body = e.body if isinstance(e.body, dict) else {"error": str(e.body or e)}
            return body
        except TransportError as e:
            logger.error(f"Bulk request failed: {e}", exc_info=True)
            raise StorageError(f"Bulk request failed: {e}") from e

        return _body(response)

    async def ping(self) -> bool:
        """
        Test the connection

        Returns:
            True if the cluster answered
        """
        try:
            return await self.client.ping()
        except (ApiError, TransportError) as e:
            logger.error(f"ES ping failed: {e}")
            return False

    async def close(self) -> None:
        """Close the underlying connection pool"""
        await self.client.close()
        logger.info("Elasticsearch connection closed")


def create_es_client(settings: Optional[Settings] = None) -> ElasticsearchClient:
    """
    Build a client from settings

    Args:
        settings: application settings (defaults to get_settings())

    Returns:
        ElasticsearchClient instance
    """
    return ElasticsearchClient(config=ESConfig.from_settings(settings))

import httpx

from nutrireport.ingestion.exceptions import FetchBackError


class ArtifactFetcher:
    """Downloads a stored artifact back through its public URL."""

    def __init__(self, client: httpx.Client | None = None, timeout_seconds: int = 30) -> None:
        self._client = client if client is not None else httpx.Client(timeout=timeout_seconds)

    def fetch(self, url: str) -> bytes:
        """Return the body of a successful GET on `url`.

        Raises:
            FetchBackError: on a transport error or a non-2xx response.
        """
        try:
            response = self._client.get(url, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise FetchBackError(f"Failed to fetch image: {exc}") from exc
        if not response.is_success:
            raise FetchBackError(
                f"Failed to fetch image: {response.status_code} {response.reason_phrase}"
            )
        return response.content

    def close(self) -> None:
        self._client.close()

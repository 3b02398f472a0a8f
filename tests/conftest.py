"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path

import httpx
import pytest

from ledger_gateway.config.cloud_env import CloudEnvironment
from ledger_gateway.config.settings import GatewaySettings, ObjectStorageCredentials
from ledger_gateway.credentials.object_store_wallet import ObjectStorageWallet
from ledger_gateway.providers.object_storage import ObjectStorageClient
from ledger_gateway.utils.connection_pool import HTTPConnectionPool


class InMemoryObjectStore:
    """Object store holding objects in a dict keyed by URL.

    Records every call so tests can assert on the round trips made.
    """

    def __init__(self, url: str = "https://store/wallet1", objects: dict[str, str] | None = None):
        self._url = url
        self.objects: dict[str, str] = dict(objects or {})
        self.calls: list[tuple[str, ...]] = []

    @property
    def url(self) -> str:
        return self._url

    async def list_objects(self) -> list[str]:
        self.calls.append(("list",))
        return list(self.objects)

    async def get_object(self, url: str) -> str:
        self.calls.append(("get", url))
        return self.objects[url]

    async def put_object(self, url: str, body: str) -> None:
        self.calls.append(("put", url))
        self.objects[url] = body

    async def delete_object(self, url: str) -> None:
        self.calls.append(("delete", url))
        del self.objects[url]


@pytest.fixture
def object_store() -> InMemoryObjectStore:
    """Empty in-memory object store for container wallet1."""
    return InMemoryObjectStore()


@pytest.fixture
def wallet(object_store: InMemoryObjectStore) -> ObjectStorageWallet:
    """Wallet backed by the in-memory object store."""
    return ObjectStorageWallet("wallet1", store=object_store)


@pytest.fixture
def storage_credentials() -> ObjectStorageCredentials:
    """Object Storage credentials as bound by the platform."""
    return ObjectStorageCredentials(
        userId="user-123",
        password="s3cret",
        projectId="project-456",
        auth_url="https://identity.example.com",
        region="dallas",
    )


@pytest.fixture
def vcap_services() -> dict:
    """VCAP_SERVICES payload with one Object Storage binding."""
    return {
        "Object-Storage": [
            {
                "name": "Object Storage-ab",
                "label": "Object-Storage",
                "tags": ["storage"],
                "credentials": {
                    "auth_url": "https://identity.example.com",
                    "projectId": "project-456",
                    "region": "dallas",
                    "userId": "user-123",
                    "password": "s3cret",
                    "domainId": "domain-789",
                },
            }
        ]
    }


@pytest.fixture
def cloud_env(vcap_services: dict) -> CloudEnvironment:
    """Cloud environment running on the platform with an Object Storage binding."""
    return CloudEnvironment.from_environ(
        {
            "VCAP_APPLICATION": json.dumps({"name": "gateway", "application_uris": ["gateway.example.com"]}),
            "VCAP_SERVICES": json.dumps(vcap_services),
            "PORT": "8080",
        }
    )


@pytest.fixture
def profiles_dir(tmp_path: Path) -> Path:
    """Connection profiles directory containing profile 'hlfv1'."""
    profile_dir = tmp_path / "profiles" / "hlfv1"
    profile_dir.mkdir(parents=True)
    (profile_dir / "connection.json").write_text(json.dumps({"url": "https://ledger.example.com/", "timeout": 10}))
    return tmp_path / "profiles"


@pytest.fixture
def settings(profiles_dir: Path) -> GatewaySettings:
    """Gateway settings for testing."""
    return GatewaySettings(
        connection_profile="hlfv1",
        business_network="digitalproperty-network",
        user_id="admin",
        user_secret="adminpw",
        container="wallet1",
        profiles_dir=profiles_dir,
    )


# =============================================================================
# Swift fake
# =============================================================================


ENDPOINT = "https://dal.objectstorage.example.com/v1/AUTH_project-456"


def token_response(region: str = "dallas") -> httpx.Response:
    return httpx.Response(
        201,
        headers={"X-Subject-Token": "token-abc"},
        json={
            "token": {
                "catalog": [
                    {"type": "identity", "endpoints": []},
                    {
                        "type": "object-store",
                        "endpoints": [
                            {"interface": "internal", "region": region, "url": "https://internal.example.com"},
                            {"interface": "public", "region": "london", "url": "https://lon.example.com"},
                            {"interface": "public", "region": region, "url": ENDPOINT + "/"},
                        ],
                    },
                ]
            }
        },
    )


class FakeSwift:
    """Request handler emulating the identity service and one container."""

    def __init__(self, objects: dict[str, str] | None = None, catalog_region: str = "dallas"):
        self.objects = dict(objects or {})
        self.catalog_region = catalog_region
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/v3/auth/tokens":
            return token_response(self.catalog_region)

        if request.headers.get("X-Auth-Token") != "token-abc":
            return httpx.Response(401)

        container_path = "/v1/AUTH_project-456/wallet1"
        if path == container_path and request.method == "GET":
            return httpx.Response(200, text="".join(f"{name}\n" for name in self.objects))

        name = path[len(container_path) + 1 :]
        if request.method == "GET":
            if name not in self.objects:
                return httpx.Response(404)
            return httpx.Response(200, text=self.objects[name])
        if request.method == "PUT":
            self.objects[name] = request.content.decode("utf-8")
            return httpx.Response(201)
        if request.method == "DELETE":
            if self.objects.pop(name, None) is None:
                return httpx.Response(404)
            return httpx.Response(204)
        return httpx.Response(405)


def make_client(storage_credentials, swift: FakeSwift) -> ObjectStorageClient:
    pool = HTTPConnectionPool(storage_credentials.auth_url, transport=httpx.MockTransport(swift))
    return ObjectStorageClient(storage_credentials, "wallet1", pool=pool)

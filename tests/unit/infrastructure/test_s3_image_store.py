from __future__ import annotations

import pytest
from botocore.stub import ANY, Stubber

from src.application.errors import InfrastructureError
from src.infrastructure.storage.s3 import S3ImageStore


@pytest.fixture()
def store(monkeypatch) -> S3ImageStore:
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    return S3ImageStore(bucket="herd-images", region="eu-west-1", prefix="farm/")


def test_public_url():
    assert (
        S3ImageStore(bucket="b", region="us-east-1").public_url("k.jpg")
        == "https://b.s3.amazonaws.com/k.jpg"
    )
    assert (
        S3ImageStore(bucket="b", region="eu-west-1", public_url_base="https://cdn.test/")
        .public_url("k.jpg")
        == "https://cdn.test/k.jpg"
    )


@pytest.mark.asyncio
async def test_store_puts_object_and_returns_url(store):
    with Stubber(store._s3) as stubber:
        stubber.add_response(
            "put_object",
            {},
            {"Bucket": "herd-images", "Key": ANY, "Body": b"img", "ContentType": "image/png"},
        )
        url = await store.store(b"img", content_type="image/png", filename="Cow.PNG")
        stubber.assert_no_pending_responses()
    assert url.startswith("https://herd-images.s3.eu-west-1.amazonaws.com/farm/animals/")
    assert url.endswith(".png")


@pytest.mark.asyncio
async def test_store_wraps_client_errors(store):
    with Stubber(store._s3) as stubber:
        stubber.add_client_error("put_object", service_error_code="AccessDenied")
        with pytest.raises(InfrastructureError):
            await store.store(b"img", content_type="image/jpeg")

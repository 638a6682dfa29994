from fastapi import APIRouter, Depends, HTTPException, Query, status

from pkggodev.core.config import settings
from pkggodev.core.errors import NotFoundError, NotYetImplementedError, PkgGoDevError, TransportError
from pkggodev.schemas import ImportedBy, License, Package, SearchResults, Versions
from pkggodev.services.client import PkgGoDevClient

router = APIRouter()

def get_client() -> PkgGoDevClient:
    return PkgGoDevClient()

def _http_error(e: PkgGoDevError) -> HTTPException:
    if isinstance(e, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(e, TransportError):
        code = status.HTTP_502_BAD_GATEWAY
    elif isinstance(e, NotYetImplementedError):
        code = status.HTTP_501_NOT_IMPLEMENTED
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=str(e))

@router.get("/packages/{package:path}", response_model=Package)
def describe_package(package: str, client: PkgGoDevClient = Depends(get_client)):
    """Package metadata from the detail page."""
    try:
        return client.describe_package(package)
    except PkgGoDevError as e:
        raise _http_error(e)

@router.get("/versions/{package:path}", response_model=Versions)
def list_versions(package: str, client: PkgGoDevClient = Depends(get_client)):
    """Version history, newest first."""
    try:
        return client.versions(package)
    except PkgGoDevError as e:
        raise _http_error(e)

@router.get("/imported-by/{package:path}", response_model=ImportedBy)
def imported_by(package: str, client: PkgGoDevClient = Depends(get_client)):
    try:
        return client.imported_by(package)
    except PkgGoDevError as e:
        raise _http_error(e)

@router.get("/licenses/{package:path}", response_model=list[License])
def licenses(package: str, client: PkgGoDevClient = Depends(get_client)):
    try:
        return client.licenses(package)
    except PkgGoDevError as e:
        raise _http_error(e)

@router.get("/search", response_model=SearchResults)
def search(
    q: str = Query(..., min_length=1),
    limit: int = Query(settings.SEARCH_LIMIT, ge=1),
    client: PkgGoDevClient = Depends(get_client),
):
    """
    Search packages.

    Pages on the site are followed until ``limit`` results are collected or
    the last page is reached.
    """
    try:
        return client.search(q, limit=limit)
    except PkgGoDevError as e:
        raise _http_error(e)

@router.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "pkggodev"}

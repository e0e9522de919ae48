from typing import Literal

from fastapi import APIRouter, Depends

from api.dependencies import get_catalog
from clients.tmdb import CatalogClient

router = APIRouter(prefix="/catalog", tags=["catalog"])

MediaType = Literal["movie", "tv"]


@router.get("/home")
async def home(catalog: CatalogClient = Depends(get_catalog)):
    sections = await catalog.home_sections()
    return {"sections": sections, "notices": catalog.notices}


@router.get("/search")
async def search(
    query: str = "",
    media_type: Literal["movie", "multi"] = "multi",
    catalog: CatalogClient = Depends(get_catalog),
):
    results = await catalog.search(query, media_type)
    return {"results": results, "notices": catalog.notices}


@router.get("/trending")
async def trending(catalog: CatalogClient = Depends(get_catalog)):
    return {"results": await catalog.trending(), "notices": catalog.notices}


@router.get("/discover/{media_type}")
async def discover(
    media_type: MediaType,
    genre_id: int,
    catalog: CatalogClient = Depends(get_catalog),
):
    results = await catalog.discover(genre_id, media_type)
    return {"results": results, "notices": catalog.notices}


@router.get("/genres/{media_type}")
async def genres(media_type: MediaType, catalog: CatalogClient = Depends(get_catalog)):
    return {"genres": await catalog.genres(media_type), "notices": catalog.notices}


@router.get("/popular/{media_type}")
async def popular(media_type: MediaType, catalog: CatalogClient = Depends(get_catalog)):
    return {"results": await catalog.popular(media_type), "notices": catalog.notices}


@router.get("/top-rated/{media_type}")
async def top_rated(media_type: MediaType, catalog: CatalogClient = Depends(get_catalog)):
    return {"results": await catalog.top_rated(media_type), "notices": catalog.notices}


@router.get("/{media_type}/{title_id}")
async def title_details(
    media_type: MediaType,
    title_id: int,
    include_trailer: bool = False,
    catalog: CatalogClient = Depends(get_catalog),
):
    title = await catalog.get_title(title_id, media_type)
    if title is not None and include_trailer:
        title.trailer = await catalog.get_trailer(title_id, media_type)
    return {"title": title, "notices": catalog.notices}


@router.get("/{media_type}/{title_id}/trailer")
async def trailer(
    media_type: MediaType,
    title_id: int,
    catalog: CatalogClient = Depends(get_catalog),
):
    url = await catalog.get_trailer(title_id, media_type)
    return {"trailer": url, "notices": catalog.notices}

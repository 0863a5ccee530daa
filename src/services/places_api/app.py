# src/services/places_api/app.py
"""
FastAPI приложение Places API.

Backend для Telegram Mini App: пользователи, места, избранное,
комментарии, оценки и прокси к провайдеру POI.

Endpoints:
- GET /health - проверка здоровья
- GET /api/users/{telegram_id} - пользователь по Telegram ID
- POST /api/users - регистрация
- PUT /api/users/{id} - перезапись профиля
- PUT /api/users/update/{id} - частичное обновление профиля
- GET /api/locations - список мест
- POST /api/locations - добавить место
- GET /api/users/{telegram_id}/favorites - избранное
- POST /api/users/{telegram_id}/favorites - добавить в избранное
- DELETE /api/users/{telegram_id}/favorites/{location_id} - убрать из избранного
- GET /api/comments, POST /api/comments - комментарии
- GET /api/ratings, POST /api/ratings - оценки
- GET /api/pois - POI OpenStreetMap в видимой области
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.common.logger import log_error, log_warning
from src.config import settings
from src.core.errors import PlacesError
from src.core.locations.models import Location, LocationCreateDTO
from src.core.locations.service import FavoriteService, LocationService
from src.core.poi.models import PointOfInterest, ViewportBounds
from src.core.poi.provider import OverpassPoiProvider, PoiProviderError
from src.core.reviews.models import (
    Comment,
    CommentCreateDTO,
    Rating,
    RatingCreateDTO,
    RatingSummary,
)
from src.core.reviews.service import CommentService, RatingService
from src.core.users.models import User, UserCreateDTO, UserUpdateDTO
from src.core.users.service import UserService
from src.infra.postgrest import PostgrestError
from src.services.places_api.dependencies import (
    cleanup_dependencies,
    get_comment_service,
    get_favorite_service,
    get_location_service,
    get_poi_provider,
    get_rating_service,
    get_user_service,
    init_dependencies,
)

API_VERSION = "1.0.0"
INTERNAL_ERROR = {"error": "Internal server error"}


# === REQUEST MODELS ===

class FavoriteRequest(BaseModel):
    """Запрос добавления в избранное."""
    model_config = ConfigDict(populate_by_name=True)

    location_id: Any = Field(None, alias="locationId")


# === LIFESPAN ===

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Жизненный цикл приложения."""
    from src.infra.postgrest import close_postgrest, init_postgrest

    client = await init_postgrest()
    await init_dependencies(client=client, poi_provider=OverpassPoiProvider.from_settings())

    yield

    await cleanup_dependencies()
    await close_postgrest()


# === APP ===

app = FastAPI(
    title="Places API",
    description="Backend для Telegram Mini App с картой мест.",
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS для Mini App (загружается с разных доменов)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.deployment.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === ERROR HANDLERS ===

@app.exception_handler(PlacesError)
async def places_error_handler(request: Request, exc: PlacesError) -> JSONResponse:
    """Доменные ошибки: 400 / 404 / 409."""
    await log_warning(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTP ошибки в едином формате {"error": ...}."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Некорректное тело или параметры запроса."""
    await log_warning(f"{request.method} {request.url.path}: невалидный запрос {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


@app.exception_handler(PostgrestError)
async def postgrest_error_handler(request: Request, exc: PostgrestError) -> JSONResponse:
    """Ошибки хранилища отдаются клиенту без подробностей."""
    await log_error(f"{request.method} {request.url.path}: {exc!r}")
    return JSONResponse(status_code=500, content=INTERNAL_ERROR)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    await log_error(f"{request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content=INTERNAL_ERROR)


# === HEALTH CHECK ===

@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Проверка здоровья сервиса."""
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


# === USERS ===

@app.get("/api/users/{telegram_id}", response_model=User, tags=["Users"])
async def get_user(
    telegram_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    """Пользователь по Telegram ID."""
    return await service.get_by_telegram_id(telegram_id)


@app.post("/api/users", response_model=User, status_code=201, tags=["Users"])
async def create_user(
    request: UserCreateDTO,
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    """Регистрация пользователя."""
    return await service.create(request)


@app.put("/api/users/update/{user_id}", response_model=User, tags=["Users"])
async def update_user_profile(
    user_id: str,
    request: UserUpdateDTO,
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    """Частичное обновление профиля (только переданные поля)."""
    return await service.update_profile(user_id, request)


@app.put("/api/users/{user_id}", response_model=User, tags=["Users"])
async def replace_user_profile(
    user_id: str,
    request: UserUpdateDTO,
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    """Перезапись никнейма и аватара."""
    return await service.replace_profile(user_id, request)


# === LOCATIONS ===

@app.get("/api/locations", response_model=list[Location], tags=["Locations"])
async def list_locations(
    service: Annotated[LocationService, Depends(get_location_service)],
    category: Optional[str] = None,
) -> list[Location]:
    """Места, новые первыми."""
    return await service.list_locations(category)


@app.post("/api/locations", response_model=Location, status_code=201, tags=["Locations"])
async def create_location(
    request: LocationCreateDTO,
    service: Annotated[LocationService, Depends(get_location_service)],
) -> Location:
    """Добавить место."""
    return await service.create_location(request)


# === FAVORITES ===

@app.get("/api/users/{telegram_id}/favorites", response_model=list[Location], tags=["Favorites"])
async def list_favorites(
    telegram_id: str,
    service: Annotated[FavoriteService, Depends(get_favorite_service)],
) -> list[Location]:
    """Избранные места пользователя."""
    return await service.list_favorites(telegram_id)


@app.post(
    "/api/users/{telegram_id}/favorites",
    response_model=Optional[Location],
    status_code=201,
    tags=["Favorites"],
)
async def add_favorite(
    telegram_id: str,
    request: FavoriteRequest,
    service: Annotated[FavoriteService, Depends(get_favorite_service)],
) -> Optional[Location]:
    """Добавить место в избранное."""
    return await service.add_favorite(telegram_id, request.location_id)


@app.delete(
    "/api/users/{telegram_id}/favorites/{location_id}",
    status_code=204,
    response_class=Response,
    tags=["Favorites"],
)
async def remove_favorite(
    telegram_id: str,
    location_id: str,
    service: Annotated[FavoriteService, Depends(get_favorite_service)],
) -> Response:
    """Убрать место из избранного."""
    await service.remove_favorite(telegram_id, location_id)
    return Response(status_code=204)


# === COMMENTS ===

@app.get("/api/comments", response_model=list[Comment], tags=["Reviews"])
async def list_comments(
    location_id: Annotated[int, Query()],
    service: Annotated[CommentService, Depends(get_comment_service)],
) -> list[Comment]:
    """Одобренные комментарии места."""
    return await service.list_comments(location_id)


@app.post("/api/comments", response_model=Comment, status_code=201, tags=["Reviews"])
async def create_comment(
    request: CommentCreateDTO,
    service: Annotated[CommentService, Depends(get_comment_service)],
) -> Comment:
    """Оставить комментарий."""
    return await service.create_comment(request)


# === RATINGS ===

@app.get("/api/ratings", response_model=RatingSummary, tags=["Reviews"])
async def get_rating_summary(
    location_id: Annotated[int, Query()],
    service: Annotated[RatingService, Depends(get_rating_service)],
) -> RatingSummary:
    """Средняя оценка места."""
    return await service.summary(location_id)


@app.post("/api/ratings", response_model=Rating, tags=["Reviews"])
async def rate_location(
    request: RatingCreateDTO,
    response: Response,
    service: Annotated[RatingService, Depends(get_rating_service)],
) -> Rating:
    """Поставить оценку: 201 для новой, 200 при замене прежней."""
    rating, created = await service.rate(request)
    response.status_code = 201 if created else 200
    return rating


# === POI ===

@app.get("/api/pois", response_model=list[PointOfInterest], tags=["POI"])
async def list_pois(
    north: float,
    south: float,
    east: float,
    west: float,
    provider: Annotated[OverpassPoiProvider, Depends(get_poi_provider)],
) -> list[PointOfInterest]:
    """POI OpenStreetMap в заданной области."""
    try:
        bounds = ViewportBounds(north=north, south=south, east=east, west=west)
    except PydanticValidationError:
        raise HTTPException(status_code=400, detail="Invalid bounds")

    try:
        return await provider.fetch_pois(bounds)
    except PoiProviderError as e:
        await log_error(f"Провайдер POI недоступен: {e}")
        raise HTTPException(status_code=502, detail="POI provider unavailable")

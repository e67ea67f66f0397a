import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.views import AppView, DetailView, DirectoryView, FilterRequest
from services.navigation import InvalidTransition, NavigationController
from services.presenter import app_view, detail_view, directory_view

logger = logging.getLogger(__name__)

router = APIRouter(tags=["explorer"])

limiter = Limiter(key_func=get_remote_address)


def get_controller(request: Request) -> NavigationController:
    return request.app.state.controller


@router.get("/view", response_model=AppView)
async def current_view(controller: NavigationController = Depends(get_controller)):
    return app_view(controller)


@router.get("/directory", response_model=DirectoryView)
async def get_directory(controller: NavigationController = Depends(get_controller)):
    if controller.mode.is_detail:
        raise HTTPException(status_code=409, detail="Directory is not active")
    return directory_view(controller.directory)


@router.put("/directory/filter", response_model=DirectoryView)
async def set_filter(req: FilterRequest, controller: NavigationController = Depends(get_controller)):
    try:
        controller.set_filter(req.text)
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    return directory_view(controller.directory)


@router.post("/countries/{name}/select", response_model=DetailView)
@limiter.limit(settings.select_rate_limit)
async def select_country(
    request: Request, name: str, controller: NavigationController = Depends(get_controller)
):
    if not name.strip():
        raise HTTPException(status_code=400, detail="Country name cannot be empty")
    try:
        task = controller.select(name)
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    await asyncio.shield(task)
    return detail_view(controller.session)


@router.post("/back", response_model=DirectoryView)
async def back(controller: NavigationController = Depends(get_controller)):
    try:
        controller.back()
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    return directory_view(controller.directory)


@router.post("/retry", response_model=AppView)
async def retry(controller: NavigationController = Depends(get_controller)):
    task = controller.retry()
    if task is not None:
        await asyncio.shield(task)
    return app_view(controller)

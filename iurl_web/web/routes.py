"""Public redirect route."""

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from iurl.common.url_builder import short_path_from_request_path
from iurl.errors import RegistryError

router = APIRouter()


@router.get("/{path:path}", include_in_schema=False)
async def redirect_by_path(request: Request, path: str):
    """Redirect to the destination registered under the last path segment.

    Works both at the root (``/abc``) and behind a rewrite prefix (``/s/abc``).
    """
    short_path = short_path_from_request_path(path)

    if not short_path:
        return PlainTextResponse(
            "Bad Request: Missing path identifier.",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    registry = request.app.state.registry

    try:
        destination = await registry.resolve(short_path)
    except RegistryError:
        # Already logged with context by the registry
        return PlainTextResponse(
            "Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if destination is None:
        return PlainTextResponse(
            "Not Found: The shortened URL does not exist.",
            status_code=status.HTTP_404_NOT_FOUND,
        )

    # 302 so browsers keep coming back and every visit is counted
    return RedirectResponse(url=destination, status_code=status.HTTP_302_FOUND)

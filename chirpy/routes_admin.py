import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from .config import ApiConfig


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

METRICS_TEMPLATE = """<html>
	<body>
		<h1>Welcome, Chirpy Admin</h1>
		<p>Chirpy has been visited {hits} times!</p>
	</body>
	</html>"""


def get_api_config(request: Request) -> ApiConfig:
    return request.app.state.api_config


@router.api_route("/metrics", methods=["GET", "HEAD"])
def metrics(cfg: ApiConfig = Depends(get_api_config)) -> Response:
    hits = cfg.fileserver_hits.load()
    # exact header value; media_type would append a charset
    return Response(content=METRICS_TEMPLATE.format(hits=hits), headers={"Content-Type": "text/html"})


@router.post("/reset")
def reset(cfg: ApiConfig = Depends(get_api_config)) -> Response:
    cfg.fileserver_hits.reset()
    logger.info("fileserver hit counter reset")
    return Response(content="Fileserver hit counter reset", headers={"Content-Type": "text/plain"})

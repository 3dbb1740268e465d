from fastapi import APIRouter, HTTPException
from errors import AuthError, ValidationError
from models import Credential, PageChange, SessionInfo
from state import login, logout, navigate
from storage import load_state, save_state
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/session", response_model=SessionInfo)
def get_session():
    return load_state().session_info()


@router.post("/login", response_model=SessionInfo)
def post_login(credential: Credential):
    logger.info("POST /login — attempting login")
    try:
        state = login(load_state(), credential.password)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AuthError as e:
        logger.warning("POST /login — %s", e)
        raise HTTPException(status_code=401, detail=str(e))
    save_state(state)
    logger.info("POST /login — logged in")
    return state.session_info()


@router.post("/logout", response_model=SessionInfo)
def post_logout():
    state = logout(load_state())
    save_state(state)
    logger.info("POST /logout — logged out")
    return state.session_info()


@router.put("/session/page", response_model=SessionInfo)
def put_page(change: PageChange):
    state = navigate(load_state(), change.page)
    save_state(state)
    return state.session_info()

# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from cms import config
from cms.auth.session import SessionContext, SessionStore, sign_session_id
from cms.auth.users import CredentialStore, verify_credentials
from cms.core.filenames import next_duplicate_name, validate_document_name, validate_image_name
from cms.core.rendering import decode_text, render_markdown
from cms.errors import AuthRequired, DuplicateUsername, InvalidFilename, NotFound
from cms.infra.repository import FilesystemRepository
from cms.permissions import current_user, get_session, load_session_from_request, require_user

logger = logging.getLogger(__name__)

app = FastAPI()

BASE_DIR = Path(__file__).resolve().parent

app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

app.state.sessions = SessionStore()
app.state.credentials = CredentialStore(config.users_path())
app.state.documents = FilesystemRepository(config.data_dir())
app.state.images = FilesystemRepository(config.images_dir())
app.state.documents.ensure()
app.state.images.ensure()


@app.middleware("http")
async def _session_middleware(request: Request, call_next):
    ctx = load_session_from_request(request, app.state.sessions)
    request.state.session = ctx
    response = await call_next(request)
    if app.state.sessions.save(ctx) and ctx.is_new:
        response.set_cookie(
            config.cookie_name(),
            sign_session_id(ctx.session_id),
            max_age=config.session_max_age(),
            **config.cookie_settings(),
        )
    return response


def get_documents(request: Request) -> FilesystemRepository:
    return request.app.state.documents


def get_images(request: Request) -> FilesystemRepository:
    return request.app.state.images


def get_credentials(request: Request) -> CredentialStore:
    return request.app.state.credentials


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def _redirect(url: str = "/") -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


def _render(request: Request, template_name: str, ctx: dict, *, status_code: int = 200):
    """TemplateResponse wrapper injecting the signed-in user and the one-shot message."""
    session = get_session(request)
    base_ctx = {
        "current_user": current_user(session),
        "message": session.pop_message(),
    }
    merged = {**base_ctx, **(ctx or {})}
    return templates.TemplateResponse(request, template_name, merged, status_code=status_code)


# ------------------ Error mapping ------------------


@app.exception_handler(AuthRequired)
async def _auth_required_handler(request: Request, exc: AuthRequired):
    get_session(request).flash(exc.message)
    return _redirect("/")


@app.exception_handler(NotFound)
async def _not_found_handler(request: Request, exc: NotFound):
    get_session(request).flash(exc.message)
    return _redirect("/")


@app.exception_handler(InvalidFilename)
async def _invalid_filename_handler(request: Request, exc: InvalidFilename):
    return PlainTextResponse(exc.message, status_code=422)


# ------------------ Users ------------------


@app.get("/users/signin", response_class=HTMLResponse)
def signin_get(request: Request):
    return _render(request, "signin.html", {"username": "", "error": ""})


@app.post("/users/signin")
def signin_post(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    session: SessionContext = Depends(get_session),
    store: CredentialStore = Depends(get_credentials),
    sessions: SessionStore = Depends(get_sessions),
):
    u = (username or "").strip()
    if not verify_credentials(store, u, password):
        logger.warning("Failed sign-in for %r", u)
        return _render(
            request,
            "signin.html",
            {"username": u, "error": "Invalid Credentials"},
            status_code=422,
        )
    sessions.rotate(session)
    session.sign_in(u)
    session.flash("Welcome!")
    logger.info("User %s signed in", u)
    return _redirect("/")


@app.post("/users/signout")
def signout_post(session: SessionContext = Depends(get_session)):
    session.sign_out()
    session.flash("You have been signed out.")
    return _redirect("/")


@app.get("/users/signup", response_class=HTMLResponse)
def signup_get(request: Request):
    return _render(request, "signup.html", {"username": "", "error": ""})


@app.post("/users/create")
def create_user_post(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    session: SessionContext = Depends(get_session),
    store: CredentialStore = Depends(get_credentials),
):
    u = (username or "").strip()
    if not u or not password:
        return _render(
            request,
            "signup.html",
            {"username": u, "error": "Username and password are required."},
            status_code=422,
        )
    try:
        store.create(u, password)
    except DuplicateUsername as e:
        session.flash(e.message)
        return _redirect("/users/signup")
    session.flash(f"User '{u}' successfully created.")
    return _redirect("/users/signin")


# ------------------ Images ------------------


@app.get("/images/new", response_class=HTMLResponse)
def image_new(request: Request, user: str = Depends(require_user)):
    return _render(request, "upload.html", {"error": ""})


@app.post("/images")
async def image_upload(
    request: Request,
    image_file: Optional[UploadFile] = File(None),
    user: str = Depends(require_user),
    images: FilesystemRepository = Depends(get_images),
    session: SessionContext = Depends(get_session),
):
    try:
        name = validate_image_name(image_file.filename if image_file is not None else "")
        data = await image_file.read()
        images.write(name, data)
    except InvalidFilename as e:
        return _render(request, "upload.html", {"error": e.message}, status_code=422)
    session.flash(f"'{name}' has been uploaded.")
    return _redirect("/")


@app.get("/images/{name}")
def image_view(name: str, images: FilesystemRepository = Depends(get_images)):
    p = images.path(name)
    if not p.is_file():
        raise NotFound(name)
    return FileResponse(str(p))


@app.post("/images/{name}/delete")
def image_delete(
    name: str,
    user: str = Depends(require_user),
    images: FilesystemRepository = Depends(get_images),
    session: SessionContext = Depends(get_session),
):
    images.delete(name)
    session.flash(f"{name} has been deleted.")
    return _redirect("/")


# ------------------ Documents ------------------


@app.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    documents: FilesystemRepository = Depends(get_documents),
    images: FilesystemRepository = Depends(get_images),
):
    return _render(request, "index.html", {"files": documents.list(), "images": images.list()})


@app.get("/favicon.ico", include_in_schema=False)
def favicon():
    return Response(status_code=404)


@app.get("/new", response_class=HTMLResponse)
def document_new(request: Request, user: str = Depends(require_user)):
    return _render(request, "new.html", {"file_name": "", "error": ""})


@app.post("/create")
def document_create(
    request: Request,
    file_name: str = Form(""),
    user: str = Depends(require_user),
    documents: FilesystemRepository = Depends(get_documents),
    session: SessionContext = Depends(get_session),
):
    try:
        name = validate_document_name(file_name)
        if documents.exists(name):
            raise InvalidFilename(f"{name} already exists.")
        documents.write(name, b"")
    except InvalidFilename as e:
        return _render(
            request,
            "new.html",
            {"file_name": file_name, "error": e.message},
            status_code=422,
        )
    session.flash(f"{name} has been created.")
    return _redirect("/")


@app.get("/{name}")
def document_view(request: Request, name: str, documents: FilesystemRepository = Depends(get_documents)):
    text = decode_text(documents.read(name))
    if name.endswith(".md"):
        return _render(request, "document.html", {"name": name, "html": render_markdown(text)})
    return PlainTextResponse(text)


@app.get("/{name}/edit", response_class=HTMLResponse)
def document_edit(
    request: Request,
    name: str,
    user: str = Depends(require_user),
    documents: FilesystemRepository = Depends(get_documents),
):
    content = decode_text(documents.read(name))
    return _render(request, "edit.html", {"name": name, "content": content})


@app.post("/{name}")
def document_update(
    name: str,
    content: str = Form(""),
    user: str = Depends(require_user),
    documents: FilesystemRepository = Depends(get_documents),
    session: SessionContext = Depends(get_session),
):
    if validate_document_name(name) != name:
        raise InvalidFilename(f"'{name}' is not a valid file name.")
    documents.write(name, content.encode("utf-8"))
    session.flash(f"{name} has been updated.")
    return _redirect("/")


@app.post("/{name}/delete")
def document_delete(
    name: str,
    user: str = Depends(require_user),
    documents: FilesystemRepository = Depends(get_documents),
    session: SessionContext = Depends(get_session),
):
    documents.delete(name)
    session.flash(f"{name} has been deleted.")
    return _redirect("/")


@app.post("/{name}/duplicate")
def document_duplicate(
    name: str,
    user: str = Depends(require_user),
    documents: FilesystemRepository = Depends(get_documents),
    session: SessionContext = Depends(get_session),
):
    data = documents.read(name)
    new_name = next_duplicate_name(name)
    while documents.exists(new_name):
        new_name = next_duplicate_name(new_name)
    documents.write(new_name, data)
    session.flash(f"'{name}' has been duplicated as '{new_name}'.")
    return _redirect("/")

import logging
from contextlib import asynccontextmanager
from typing import Annotated, List, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware

# Import the Pydantic schemas, the simulated database and the settings
from config import Settings, get_settings
from database import InMemoryUserStore, UserStore, get_store
from schemas import Message, User

logger = logging.getLogger(__name__)

router = APIRouter()

Store = Annotated[UserStore, Depends(get_store)]


# Dependency function to get the settings the running app was built with
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


# --- API Endpoints ---
# Root endpoint
@router.get("/", response_model=Message)
def read_root():
    return {"message": "User service is running"}

# Endpoint to store a user under its email. An existing record is overwritten.
@router.post("/user")
def create_user(user: User, store: Store):
    store.create(user)
    return Response(status_code=status.HTTP_200_OK)

# Endpoint to list every stored user
@router.get("/user", response_model=List[User])
def read_users(store: Store):
    return store.list()

# Endpoint to fetch one user by email
@router.get("/user/{email}", response_model=Optional[User])
def read_user(
    email: str,
    store: Store,
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    user = store.get(email)
    if user is None and not settings.missing_user_as_null:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

# Endpoint to replace the user stored under the email in the path.
# The body's email is stored as sent and does not move the record.
@router.put("/user/{email}")
def update_user(email: str, user: User, store: Store):
    if user.email != email:
        logger.info("Body email %s differs from key %s, keeping key", user.email, email)
    store.update(email, user)
    return Response(status_code=status.HTTP_200_OK)

# Endpoint to delete a user. Deleting an unknown email is a no-op.
@router.delete("/user/{email}")
def delete_user(email: str, store: Store):
    store.delete(email)
    return Response(status_code=status.HTTP_200_OK)


# The in-memory records live only as long as the app: drop them on shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    store = app.state.store
    logger.info("Shutting down, discarding %d stored users", len(store))
    store.clear()


def create_app(settings: Settings | None = None, store: UserStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    app = FastAPI(title="User Service", lifespan=lifespan)
    # Each app owns its store; handlers reach it through get_store
    app.state.store = store if store is not None else InMemoryUserStore()
    app.state.settings = settings

    # Configure CORS (Cross-Origin Resource Sharing) to allow the frontend to access the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    logger.info("User service ready (CORS origins: %s)", ", ".join(settings.cors_origins))
    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run("main:app", host=settings.host, port=settings.port)

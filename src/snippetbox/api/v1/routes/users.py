"""
Signup and login.

Login only performs the anonymous -> authenticated transition and returns the
user id; binding that id to a session is up to whatever session mechanism sits
in front of this API.
"""
from fastapi import APIRouter, Depends, status

from snippetbox.api.v1.dependencies import get_user_store
from snippetbox.api.v1.schemas import CreatedId, UserLogin, UserSignup
from snippetbox.stores.protocols import UserStoreProtocol
from snippetbox.validators.forms import validate_user_login, validate_user_signup

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(form: UserSignup, users: UserStoreProtocol = Depends(get_user_store)):
    validate_user_signup(form.name, form.email, form.password).raise_if_invalid()

    # DuplicateEmailError -> 409 via the registered handler
    await users.insert(form.name, form.email, form.password)
    return {"detail": "Your signup was successful. Please log in."}


@router.post("/login", response_model=CreatedId)
async def login(form: UserLogin, users: UserStoreProtocol = Depends(get_user_store)):
    validate_user_login(form.email, form.password).raise_if_invalid()

    user_id = await users.authenticate(form.email, form.password)
    return CreatedId(id=user_id)

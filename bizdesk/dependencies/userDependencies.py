from typing import Annotated
from fastapi import Depends
from bizdesk.modules.auth.dependencies import get_auth_context
from bizdesk.modules.auth.schemas import AuthContext

auth_context_dependency = Annotated[AuthContext, Depends(get_auth_context)]

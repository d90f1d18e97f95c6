from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, Hashable, Type, TypeVar

from fastapi import FastAPI, Request

from graphsmith.domain import IInjectionist, ResolutionResult, UnresolvedTypeError

T = TypeVar("T")

STATE_ATTRIBUTE = "graphsmith_results"


def create_lifespan(injectionist: IInjectionist, *root_types: Hashable) -> Callable[[FastAPI], Any]:
    """Create a FastAPI lifespan that builds the object graph once at startup.

    The injectionist is frozen before anything is resolved, then each root
    type is built in its own resolution context. The results are stored on
    ``app.state.graphsmith_results`` keyed by root type.

    Args:
        injectionist: The configured injectionist.
        *root_types: Root service types to build.

    Returns:
        A lifespan callable to pass to ``FastAPI(lifespan=...)``.

    Example:
        >>> injectionist = Injectionist()
        >>> injectionist.register(UserService, lambda c: UserService(c.get(Database)))
        >>> injectionist.register(Database, lambda c: Database())
        >>>
        >>> app = FastAPI(lifespan=create_lifespan(injectionist, UserService))
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        injectionist.freeze()
        results: Dict[Hashable, ResolutionResult] = {}
        for root_type in root_types:
            results[root_type] = injectionist.get(root_type)
        setattr(app.state, STATE_ATTRIBUTE, results)
        yield

    return lifespan


def create_root_dependency(root_type: Type[T]) -> Callable[[Request], T]:
    """Create a FastAPI dependency returning a root built at startup.

    Requires the application to run with :func:`create_lifespan`.

    Args:
        root_type: The root service type to hand out.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> get_user_service = create_root_dependency(UserService)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(service: UserService = Depends(get_user_service)):
        ...     return service.list_users()
    """

    def root_dependency(request: Request) -> T:
        """Return the prebuilt root instance."""
        results = getattr(request.app.state, STATE_ATTRIBUTE, None)
        if results is None:
            raise RuntimeError(
                "Application has no prebuilt object graph. Did you forget to pass create_lifespan() to FastAPI?"
            )
        if root_type not in results:
            raise UnresolvedTypeError(root_type, "it was not built at application startup")
        return results[root_type].instance

    return root_dependency

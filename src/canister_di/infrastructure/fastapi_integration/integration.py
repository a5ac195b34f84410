import functools
import inspect
from typing import Any, Callable, Dict, List

from fastapi import Depends

from canister_di.domain import IContainer, KeyLike, normalize_key


def create_fastapi_dependency(container: IContainer, key: KeyLike) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that resolves a key from the container.

    The value is resolved on every request, so a re-registration of the key (or
    of anything it depends on) is picked up by the next request.

    Args:
        container: The container to resolve from.
        key: The key to resolve when the dependency is called.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = Canister()
        >>> container.register("user_repository", lambda c: UserRepository(c.db))
        >>>
        >>> get_user_repo = create_fastapi_dependency(container, "user_repository")
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """
    normalized = normalize_key(key)

    def dependency() -> Any:
        """Resolve the key from the container."""
        return container.resolve(normalized)

    dependency.__name__ = f"resolve_{normalized}"
    return dependency


def inject_dependencies(container: IContainer, *keys: KeyLike) -> Callable:
    """Decorator that injects resolved keys into an endpoint function.

    Each key is passed as the keyword argument of the same name. In the
    signature FastAPI inspects, injected parameters become keyword-only
    parameters defaulting to Depends() on the key, so FastAPI resolves them per
    request instead of reading them from the query string. Called directly,
    the wrapper resolves any injected argument the caller did not pass.

    Args:
        container: The container to resolve from.
        *keys: Keys to resolve and inject.

    Returns:
        A decorator function.

    Raises:
        ValueError: If the decorated function has no parameter named after a key.

    Example:
        >>> @app.get("/users")
        >>> @inject_dependencies(container, "user_service")
        >>> async def list_users(user_service):
        ...     return await user_service.get_all()
    """
    names = [normalize_key(key) for key in keys]

    def decorator(func: Callable) -> Callable:
        """Wrap the function with injection logic."""
        signature = inspect.signature(func)
        missing = [name for name in names if name not in signature.parameters]
        if missing:
            raise ValueError(f"{func.__name__} has no parameter for injected keys: {', '.join(missing)}")

        def resolved(kwargs: Dict[str, Any]) -> Dict[str, Any]:
            for name in names:
                if name not in kwargs:
                    kwargs[name] = container.resolve(name)
            return kwargs

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def wrapper(*args, **kwargs):
                return await func(*args, **resolved(kwargs))

        else:

            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                return func(*args, **resolved(kwargs))

        kept = [param for name, param in signature.parameters.items() if name not in names]
        injected = [
            inspect.Parameter(
                name,
                inspect.Parameter.KEYWORD_ONLY,
                default=Depends(create_fastapi_dependency(container, name)),
                annotation=signature.parameters[name].annotation,
            )
            for name in names
        ]
        wrapper.__signature__ = signature.replace(parameters=_ordered(kept + injected))
        return wrapper

    return decorator


def _ordered(parameters: List[inspect.Parameter]) -> List[inspect.Parameter]:
    """Sort parameters by kind, keeping their relative order within a kind."""
    return sorted(parameters, key=lambda param: param.kind)

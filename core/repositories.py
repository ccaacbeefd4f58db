"""
Repository pattern implementation.
Abstracts data access and provides a clean interface for domain services.

Every read and write is scoped by an OwnerContext; backend failures are
translated into StorageError at this boundary.
"""
from typing import Generic, TypeVar, List
from functools import wraps
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import QuerySet, Model
import logging

from core.context import OwnerContext
from core.exceptions import NotAuthenticatedError, NotFoundError, StorageError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Model)


def storage_errors(func):
    """Translate database failures into StorageError. Constraint violations pass through."""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except IntegrityError:
            raise
        except DatabaseError as e:
            logger.error(f"Storage failure in {self.model.__name__}.{func.__name__}: {str(e)}", exc_info=True)
            raise StorageError(details={'entity': self.model.__name__, 'operation': func.__name__}) from e
    return wrapper


class BaseRepository(Generic[T]):
    """
    Base repository providing owner-scoped CRUD operations.
    Follows Repository pattern for data access abstraction.
    """
    owner_field = 'account_id'

    def __init__(self, model: type[T]):
        self.model = model

    def _scope(self, ctx: OwnerContext) -> dict:
        if not isinstance(ctx, OwnerContext) or not ctx.account_id:
            raise NotAuthenticatedError()
        return {self.owner_field: ctx.account_id}

    def get_queryset(self) -> QuerySet[T]:
        """Get base queryset for custom queries"""
        return self.model.objects.all()

    def list_by_owner(self, ctx: OwnerContext, **filters) -> QuerySet[T]:
        """All instances for the owner matching filters"""
        return self.get_queryset().filter(**self._scope(ctx), **filters)

    @storage_errors
    def fetch(self, ctx: OwnerContext, **filters) -> List[T]:
        """Evaluated list_by_owner (query errors surface here)"""
        return list(self.list_by_owner(ctx, **filters))

    @storage_errors
    def get_for_owner(self, ctx: OwnerContext, id: int, for_update: bool = False) -> T:
        """
        Get a single instance owned by ctx.

        Raises:
            NotFoundError: If it doesn't exist or belongs to another owner
        """
        queryset = self.list_by_owner(ctx, id=id)
        if for_update:
            queryset = queryset.select_for_update(of=('self',))
        instance = queryset.first()
        if instance is None:
            raise NotFoundError(resource_type=self.model.__name__, resource_id=id)
        return instance

    @storage_errors
    def create(self, ctx: OwnerContext, **data) -> T:
        """Create a new instance for the owner"""
        return self.model.objects.create(**data, **self._scope(ctx))

    @storage_errors
    def update(self, ctx: OwnerContext, id: int, **patch) -> T:
        """Update an existing instance"""
        with transaction.atomic():
            instance = self.get_for_owner(ctx, id, for_update=True)
            for key, value in patch.items():
                setattr(instance, key, value)
            instance.save()
            return instance

    @storage_errors
    def delete(self, ctx: OwnerContext, id: int) -> None:
        """Delete an instance"""
        instance = self.get_for_owner(ctx, id)
        instance.delete()

    @storage_errors
    def exists(self, ctx: OwnerContext, **filters) -> bool:
        """Check if instance exists"""
        return self.list_by_owner(ctx, **filters).exists()

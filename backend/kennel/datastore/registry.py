from __future__ import annotations

from typing import Any

COLLECTIONS = ("posts", "members", "puppies", "environments")


def resolve_collection(name: str) -> Any:
    """Map a collection name to its ORM model."""
    # Imported lazily: the resource modules import the auth/datastore layers.
    from kennel.environment.models import Environment
    from kennel.member.models import Member
    from kennel.post.models import Post
    from kennel.puppy.models import Puppy

    models = {
        "posts": Post,
        "members": Member,
        "puppies": Puppy,
        "environments": Environment,
    }
    try:
        return models[name]
    except KeyError:
        raise ValueError(f"Unknown collection: {name}") from None

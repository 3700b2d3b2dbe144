"""
Horse response mapping utilities.

Transforms ORM models and cascade results into Pydantic response models.

Dependencies: stablebook.models
System role: Horse response transformation
"""

from typing import Sequence

from stablebook.boundary.db.CRUD import CascadeDeleteResult
from stablebook.boundary.db.models import HorseModel
from stablebook.models.common import DeleteResponse, RelatedRemoteIds
from stablebook.models.horse import HorseResponse


def map_horse_to_response(horse: HorseModel) -> HorseResponse:
    """Transform a horse row into HorseResponse."""
    return HorseResponse.model_validate(horse)


def map_horses_to_response(horses: Sequence[HorseModel]) -> list[HorseResponse]:
    """Transform horse rows into a list of HorseResponse."""
    return [map_horse_to_response(horse) for horse in horses]


def map_cascade_to_response(result: CascadeDeleteResult, include_related: bool) -> DeleteResponse:
    """
    Transform a cascade result into DeleteResponse.

    Args:
        result: Records removed with the horse
        include_related: Whether to list dependents' remote ids (admin callers)

    Returns:
        DeleteResponse: ``firebaseId`` plus, for admins, ``relatedFirebaseIds``
    """
    response = DeleteResponse(success=True, firebase_id=result.horse.firebase_id)
    if include_related:
        response.related_firebase_ids = RelatedRemoteIds(**result.remote_ids())
    return response

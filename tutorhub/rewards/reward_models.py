from pydantic import Field

from tutorhub.common import CamelModel


class RewardGrant(CamelModel):
    points: int = Field(..., gt=0)
    reason: str = Field(..., min_length=1)


class RewardRedemption(CamelModel):
    reward_id: int = Field(..., description="Catalog id of the reward, e.g. 1 = free lesson")
    reward_name: str = Field(..., min_length=1)
    cost: int = Field(..., ge=0)

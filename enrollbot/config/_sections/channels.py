"""Channel routing configuration models."""

from pydantic import BaseModel, ConfigDict


class ChannelSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    enroll_channel_id: int = 0  # where /enrollment confirmations land
    reading_channel_id: int = 0  # relay source
    destin_channel_id: int = 0  # relay destination

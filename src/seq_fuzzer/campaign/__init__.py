"""Campaign package: drives a sequence generator against a target."""

from seq_fuzzer.campaign.campaign_config import (
    CampaignConfig,
    CampaignResult,
    GenerationSnapshot,
)
from seq_fuzzer.campaign.campaign_runner import CampaignRunner

__all__ = [
    # Config
    "CampaignConfig",
    "CampaignResult",
    "GenerationSnapshot",
    # Runner
    "CampaignRunner",
]

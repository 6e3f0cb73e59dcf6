from .api import SonicAPI, SonicAPIError
from .main import OdysseyProcessor
from .rewards import RewardManager
from .transactions import TransactionSubmitter

__all__ = ['SonicAPI', 'SonicAPIError', 'OdysseyProcessor', 'RewardManager', 'TransactionSubmitter']

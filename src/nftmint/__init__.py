"""NFT Mint - AI image generation and IPFS publication service."""

__version__ = "0.1.0"

from nftmint.core.config import NftMintConfig, config

__all__ = [
    "NftMintConfig",
    "config",
]

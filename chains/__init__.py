"""
LangChain chains for workflow orchestration.
"""

from .listing_chain import ListingChain, create_listing_chain, listing_chain

__all__ = [
    "ListingChain",
    "create_listing_chain",
    "listing_chain"
]

"""
                        Services Module

Contains the service layer with the hybrid architecture pattern.
Each service has Mock (development) and Appwrite (production) implementations.

Services:
    - backend: documents and file storage of the catalog
    - session: who is signed in
    - images: re-hosting menu images in the catalog bucket
"""

from food_ordering.services.images import ImageRehoster, ImageRehostResult

__all__ = ["ImageRehoster", "ImageRehostResult"]

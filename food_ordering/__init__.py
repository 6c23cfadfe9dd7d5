"""
                Food Ordering Client

Python rendition of a food-ordering app client: an authentication-gated
tab shell and the catalog seeding job that populates the Appwrite project
(categories, customizations, menu items, images and their join records).

Author: Khalil_Bannouri
Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Khalil_Bannouri"

from __future__ import annotations


class StoreKeys:
    USER = "dwg_user"
    UNIVERSITIES = "dwg_unis"
    DORM_FAVORITES = "dwg_dorm_favs"
    DOCUMENTS = "dwg_docs"
    ACTIVITY = "dwg_activity"

    ALL = (USER, UNIVERSITIES, DORM_FAVORITES, DOCUMENTS, ACTIVITY)
    # cleared by a reset; the signed-in profile survives it
    RESETTABLE = (UNIVERSITIES, DORM_FAVORITES, DOCUMENTS, ACTIVITY)

"""
Portfolio API Backend: Setting Entry Document
=============================================

What:  Model for the `settings` collection, one document per key.
How:   `key` is unique (index created at startup); writes are upserts.
Who:   Accepted as the JSON body of POST /api/settings.
"""

from typing import Optional

from pydantic import ConfigDict, Field

from portfolio_api.models.document import StoredDocument


class SettingEntry(StoredDocument):
    # Numeric values posted by the admin UI are stored in their string form
    model_config = ConfigDict(coerce_numbers_to_str=True)

    key: str = Field(min_length=1)
    value: Optional[str] = None

"""
Folder inference from LC shape ids.

LC profile and resource-template ids follow ``lc:<type>:<group>[:<sub>...]``,
for example:

    lc:profile:bf2:Work               -> profile_bf2
    lc:RT:bf2:Title:LookupTitleLc     -> RT_bf2_Title
    lc:RT:bflc:Agents:PersonLite      -> RT_bflc_Agents

Existing workspaces depend on these exact folder names.
"""

from typing import Optional

from ...constants import FolderClassifierLimits


def _is_short_token(segment: str, max_length: int) -> bool:
    return bool(segment) and len(segment) <= max_length and " " not in segment


def classify_folder(shape_id: Optional[str]) -> Optional[str]:
    """
    Return the folder name for a shape id, or None if it does not follow
    the LC id scheme.

    Args:
        shape_id: Shape id to classify.

    Returns:
        ``type_group`` or, for resource templates with a usable fourth
        segment, ``type_group_sub``.
    """
    if not shape_id:
        return None
    parts = shape_id.split(":")
    if len(parts) < 3 or parts[0] != FolderClassifierLimits.ROOT_TOKEN:
        return None

    type_tag, group = parts[1], parts[2]
    if not type_tag or not _is_short_token(group, FolderClassifierLimits.MAX_GROUP_LENGTH):
        return None

    if (
        type_tag == FolderClassifierLimits.RESOURCE_TEMPLATE_TAG
        and len(parts) >= 4
        and _is_short_token(parts[3], FolderClassifierLimits.MAX_SUBGROUP_LENGTH)
    ):
        return f"{type_tag}_{group}_{parts[3]}"
    return f"{type_tag}_{group}"

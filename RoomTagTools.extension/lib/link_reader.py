# -*- coding: utf-8 -*-
"""Revit link helpers: link instances, their documents and transforms."""

from pyrevit import DB


def list_link_instances(doc):
    if doc is None:
        return []
    return list(DB.FilteredElementCollector(doc)
                .OfClass(DB.RevitLinkInstance)
                .WhereElementIsNotElementType()
                .ToElements())


def get_link_doc(link_instance):
    """Linked Document, or None when the link is unloaded or unreadable."""
    try:
        return link_instance.GetLinkDocument()
    except Exception:
        return None


def is_linked_document(link_doc):
    try:
        return bool(link_doc.IsLinked)
    except Exception:
        return False


def get_total_transform(link_instance):
    try:
        t = link_instance.GetTotalTransform()
        return t if t else DB.Transform.Identity
    except Exception:
        return DB.Transform.Identity


def get_link_name(link_instance):
    try:
        return link_instance.Name or u''
    except Exception:
        return u''


def try_get_link_path(host_doc, link_instance):
    """Best effort: user-visible path of the linked file, or None."""
    try:
        link_type = host_doc.GetElement(link_instance.GetTypeId())
        if link_type is None:
            return None

        extref = DB.ExternalFileUtils.GetExternalFileReference(host_doc, link_type.Id)
        if extref is None:
            return None

        mp = extref.GetPath()
        if mp is None:
            return None

        return DB.ModelPathUtils.ConvertModelPathToUserVisiblePath(mp)
    except Exception:
        return None


def iter_elements_by_category(doc, bic):
    """Yield non-type elements of a BuiltInCategory."""
    if doc is None:
        return

    col = (DB.FilteredElementCollector(doc)
           .OfCategory(bic)
           .WhereElementIsNotElementType())
    for e in col:
        yield e


def iter_rooms(doc):
    for e in iter_elements_by_category(doc, DB.BuiltInCategory.OST_Rooms):
        yield e


def iter_room_tags(doc):
    for e in iter_elements_by_category(doc, DB.BuiltInCategory.OST_RoomTags):
        yield e

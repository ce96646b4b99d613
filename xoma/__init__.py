#    xoma/__init__.py - Xml Object MApper
#    Copyright (C) 2009 Shawn Sulma <genosha@470th.org>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
r"""XOMA (Xml Object MApper) maps Python objects to XML documents and back.  Unlike
:mod:`pickle` (or a generic object dump) the shape of the XML is decided by the classes
themselves: each class declares which of its properties are written, whether as
attributes or as child elements, under which names, and how ``None`` and overlong text
are treated.  That makes it suitable for reading and writing documents whose format is
dictated by someone else.

The moving parts are:

 - declarations (:mod:`xoma.annotations`), attached to classes and properties with
   :func:`xml`;
 - a per-serializer metadata cache (:mod:`xoma.cache`) so each class is introspected once;
 - the class identity policy (:mod:`xoma.identity`) deciding which class an element
   becomes: by tag name or ``xsi:type``, explicit overrides, or a module namespace;
 - the encoder and decoder (:mod:`xoma.encoder`, :mod:`xoma.decoder`), which only touch
   objects through their getters and setters.

Like :mod:`pickle` there are limitations.  The following cannot be mapped:

 - cyclic object graphs (a :class:`~xoma.errors.CycleDetected` error is raised);
 - classes whose constructor requires arguments (they cannot be unserialized);
 - anything that is not declared (undeclared properties are simply not written).

The whole document is held in memory; mapping is not streamable.

:mod:`xoma.XML` provides the :class:`Serializer` and an interface that users of
:mod:`pickle` should find familiar (dumps, loads, marshal, unmarshal).
"""
from xoma.annotations import xml, resolve, ClassMetadata, ClassOptions, PropertyMetadata, ATTRIBUTE, ELEMENT
from xoma.cache import MetadataCache
from xoma.config import MappingConfig, TAG_NAME, TYPE_ATTRIBUTE
from xoma.errors import *
from xoma.identity import ClassIdentityPolicy, resolve_type, XSI
from xoma.sanitize import sanitize
from xoma.XML import Serializer, dumps, loads, marshal, unmarshal

#    xoma/XML.py - XML serialization of declared objects.
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
r"""xoma/XML.py is the public face of the :mod:`xoma` mapping library.  It provides a
:class:`Serializer` and functions similar to those found in :mod:`pickle` or :mod:`json`
(``dumps``, ``loads``) but the representation is XML shaped by the classes' own
declarations rather than a generic object dump.

A :class:`Serializer` owns its configuration and its metadata cache::

    s = Serializer( classesNamespace = "myapp.model", skipUnknownObjects = False )
    text = s.serialize( order )
    order = s.unserialize( text )

Serialized documents always begin with ``<?xml version="1.0" encoding="UTF-8"?>``.
"""
import xml.etree.ElementTree as ET

from xoma.cache import MetadataCache
from xoma.config import MappingConfig
from xoma.decoder import XomaDecoder
from xoma.encoder import XomaEncoder
from xoma.errors import MalformedXml
from xoma.identity import XSI

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'Serializer', 'marshal', 'unmarshal', 'dumps', 'loads' ]

DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

ET.register_namespace( "xsi", XSI )

def parse ( xmldoc ) :
    r"""Turn ``xmldoc`` (text, bytes, an element or an element tree) into an element."""
    if isinstance( xmldoc, ET.ElementTree ) :
        return xmldoc.getroot()
    if isinstance( xmldoc, ET.Element ) :
        return xmldoc
    if not isinstance( xmldoc, ( str, bytes ) ) :
        raise TypeError( "cannot unserialize '%s'; expected XML text or an element" % type( xmldoc ).__name__ )
    try :
        return ET.fromstring( xmldoc )
    except ET.ParseError as ex :
        raise MalformedXml( "Malformed XML input: %s" % ex, position = ex.position )

def render ( element ) :
    return DECLARATION + ET.tostring( element, encoding = "unicode" )

class Serializer ( object ) :
    r"""Serializes objects to and unserializes them from XML.

    Configuration options (keywords, or a dict passed as ``config``) are described in
    :mod:`xoma.config`.  The metadata of every class met is cached for the lifetime of
    the serializer."""
    def __init__ ( self, config = None, **options ) :
        self.mapping = MappingConfig()
        self.cache = MetadataCache()
        if config or options :
            self.config( config, **options )

    def config ( self, config = None, **options ) :
        r"""Replace the given configuration keys, keeping the others."""
        update = dict( config or {} )
        update.update( options )
        self.mapping = self.mapping.replace( update )
        return self.mapping

    def encoder ( self ) :
        return XomaEncoder( self.mapping, self.cache )

    def decoder ( self ) :
        return XomaDecoder( self.mapping, self.cache )

    def to_element ( self, obj, element_name = None, parent = None ) :
        return self.encoder().to_element( obj, element_name, parent )

    def from_element ( self, element, hint = None ) :
        return self.decoder().from_element( element, hint )

    def get_summary ( self, klass ) :
        return self.cache.get_summary( klass )

    def serialize ( self, obj, element_name = None, parent = None ) :
        r"""Serialize ``obj`` as an XML document string.  With ``parent`` (an element) the
        new element is appended to it and only the new element is rendered."""
        element = self.to_element( obj, element_name, parent )
        return render( element )

    def unserialize ( self, xmldoc, hint = None ) :
        r"""Build the object described by ``xmldoc`` (XML text or bytes, an element or an
        element tree)."""
        return self.from_element( parse( xmldoc ), hint )

    def marshal ( self, obj, element_name = None ) :
        r"""Prepares the passed object ``obj`` for expression as XML output."""
        return ET.ElementTree( self.to_element( obj, element_name ) )

    def unmarshal ( self, xmldoc, hint = None ) :
        r"""Translates the passed XML etree ``xmldoc`` into an object."""
        return self.from_element( parse( xmldoc ), hint )

def marshal ( obj, **options ) :
    r"""Prepares the passed object ``obj`` for expression as XML output."""
    return Serializer( **options ).marshal( obj )

def unmarshal ( xmldoc, **options ) :
    r"""Translates the passed XML etree ``xmldoc`` into an object."""
    return Serializer( **options ).unmarshal( xmldoc )

def dumps ( o, **options ) :
    r"""Dump the passed object ``o`` (and the declared objects it refers to) as XML which
    is returned as a string."""
    return Serializer( **options ).serialize( o )

def loads ( s, **options ) :
    r"""Convert the passed XML string ``s`` back into Python objects."""
    return Serializer( **options ).unserialize( s )

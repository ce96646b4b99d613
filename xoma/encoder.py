#    xoma/encoder.py - writing objects out as XML elements.
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
import xml.etree.ElementTree as ET

from xoma.errors import CycleDetected, NonScalarAttribute
from xoma.identity import XSI_NIL
from xoma.sanitize import is_scalar, sanitize, to_text

__all__ = [ 'XomaEncoder' ]

# values of these types are written one node (or one attribute token) per item.
sequences = ( list, tuple )

class XomaEncoder ( object ) :
    r"""Builds element trees from objects of declared classes, reading every mapped
    property through its getter."""
    def __init__ ( self, config, cache ) :
        self.config = config
        self.cache = cache
        self.path = set()

    def to_element ( self, obj, name = None, parent = None ) :
        r"""Serialize ``obj`` as an element called ``name`` (default: the class ``name``
        option, else the class name), appended to ``parent`` when one is given."""
        if obj is None or is_scalar( obj ) or isinstance( obj, sequences ) :
            raise TypeError( "'%s' is an unsupported type. Only instances of classes can be serialized." % type( obj ).__name__ )
        oid = id( obj )
        if oid in self.path :
            raise CycleDetected( "Cyclic reference: %s instance is already being serialized" % type( obj ).__name__
                , cls = type( obj ).__qualname__ )
        summary = self.cache.get_summary( type( obj ) )
        tag = name or summary.name
        element = ET.Element( tag ) if parent is None else ET.SubElement( parent, tag )
        self.path.add( oid )
        try :
            for meta in summary.properties :
                if meta.reader is None :
                    continue
                value = meta.reader( obj )
                if meta.is_attribute :
                    self.encode_attribute( element, meta, value )
                else :
                    self.encode_elements( element, summary, meta, value )
        finally :
            self.path.discard( oid )
        return element

    def _attribute_text ( self, meta, value ) :
        if is_scalar( value ) :
            return to_text( value )
        if type( value ).__str__ is not object.__str__ :
            return str( value )
        raise NonScalarAttribute( "Object of class %s cannot be serialized as simple type (attribute '%s')"
            % ( type( value ).__name__, meta.xml_name ), field = meta.field_name )

    def encode_attribute ( self, element, meta, value ) :
        if value is None :
            return
        if isinstance( value, sequences ) :
            text = " ".join( self._attribute_text( meta, item ) for item in value if item is not None )
        else :
            text = self._attribute_text( meta, value )
        element.set( meta.xml_name, sanitize( text, meta ) )

    def skip_empty ( self, summary, meta ) :
        if meta.nil is not None :
            return not meta.nil
        if summary.options.skip_when_empty is not None :
            return summary.options.skip_when_empty
        return self.config.skip_when_empty

    def encode_elements ( self, element, summary, meta, value ) :
        values = value if isinstance( value, sequences ) else [ value ]
        for item in values :
            if item is None :
                if self.skip_empty( summary, meta ) :
                    continue
                ET.SubElement( element, meta.xml_name ).set( XSI_NIL, "true" )
            elif is_scalar( item ) :
                ET.SubElement( element, meta.xml_name ).text = sanitize( to_text( item ), meta )
            else :
                self.to_element( item, None if meta.name_from_child else meta.xml_name, element )

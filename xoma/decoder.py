#    xoma/decoder.py - building objects from XML elements.
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
r"""Deserialization.  An element becomes a freshly constructed instance of the class the
identity policy picks; its attributes and then its children are matched against the
declared properties and handed to their setters, in document order.  Properties with no
matching node keep whatever the constructor gave them."""
import inspect, logging
import xml.etree.ElementTree as ET

from xoma.annotations import resolve
from xoma.errors import ClassNotFound, MissingMutator, UnknownAttribute, UnknownElement
from xoma.identity import ClassIdentityPolicy, XSI, XSI_NIL
from xoma.sanitize import from_text, primitive_of

__all__ = [ 'XomaDecoder' ]

logger = logging.getLogger( __name__ )

XSI_PREFIX = "{%s}" % XSI

class XomaDecoder ( object ) :
    def __init__ ( self, config, cache, policy = None ) :
        self.config = config
        self.cache = cache
        self.policy = policy or ClassIdentityPolicy( config )

    def from_element ( self, element, hint = None ) :
        r"""Build the object ``element`` describes.  ``hint`` is the class the enclosing
        property declared for its values, if any."""
        rule, klass = self.policy.select( element, hint )
        summary = self.cache.get_summary( klass )
        if rule == 'namespace' and not self.config.classes_namespace and not summary.properties and resolve( klass ) is None :
            # a bare document name may only reach classes that declare a mapping.
            raise ClassNotFound( "Class '%s' declares no xml mapping" % klass.__qualname__, name = klass.__qualname__ )
        obj = klass()
        index = summary.attribute_index()
        for name, text in element.attrib.items() :
            if name.startswith( XSI_PREFIX ) :
                continue
            meta = index.get( name )
            if meta is not None :
                self.assign( obj, summary, meta, self.attribute_value( meta, text ) )
            elif summary.options.default_setter :
                node = ET.Element( name )
                node.text = text
                self.default( obj, summary, node )
            else :
                self.unknown( summary, name, UnknownAttribute, "attribute" )
        index = summary.element_index()
        for child in element :
            if not isinstance( child.tag, str ) :
                continue # comments and processing instructions
            meta = index.get( child.tag )
            if meta is not None :
                self.assign( obj, summary, meta, self.element_value( meta, child ) )
            elif summary.options.default_setter :
                self.default( obj, summary, child )
            else :
                self.unknown( summary, child.tag, UnknownElement, "element" )
        return obj

    def nested ( self, kind ) :
        # list, dict and friends hint at a container, not at a mapped class.
        return inspect.isclass( kind ) and primitive_of( kind ) is None and kind.__module__ != 'builtins'

    def attribute_value ( self, meta, text ) :
        if self.nested( meta.value_type ) :
            return meta.value_type( text )
        return from_text( text, meta.value_type, meta.field_name )

    def element_value ( self, meta, child ) :
        if child.get( XSI_NIL ) in ( "true", "1" ) :
            return None
        if self.nested( meta.value_type ) :
            return self.from_element( child, meta.value_type )
        return from_text( child.text, meta.value_type, meta.field_name )

    def assign ( self, obj, summary, meta, value ) :
        if meta.writer is None :
            raise MissingMutator( "Method %s not found in class %s" % ( meta.setter or "set_" + meta.field_name, summary.klass.__name__ )
                , cls = summary.klass.__qualname__, field = meta.field_name )
        meta.writer( obj, value )

    def default ( self, obj, summary, child ) :
        setter = getattr( obj, summary.options.default_setter, None )
        if not callable( setter ) :
            raise MissingMutator( "Default setter %s not found in class %s" % ( summary.options.default_setter, summary.klass.__name__ )
                , cls = summary.klass.__qualname__ )
        setter( self.from_element( child ) )

    def unknown ( self, summary, name, error, kind ) :
        if self.config.skip_unknown_objects :
            logger.debug( "skipping unknown %s '%s' of %s", kind, name, summary.klass.__qualname__ )
            return
        raise error( "Method for setting %s '%s' not found in class %s" % ( kind, name, summary.klass.__name__ )
            , cls = summary.klass.__qualname__, node = name )

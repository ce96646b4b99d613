#    xoma/annotations.py - mapping declarations for Xoma.
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
r"""Declaring how classes and their properties map to XML.

Only declared properties take part in mapping.  A property is declared by assigning
:func:`xml` in the class body, a class by decorating it with :func:`xml`::

    @xml( name = "human", defaultSetter = "add_item" )
    class Human ( object ) :
        id = xml( { "as" : "attr" } )
        name = xml( maxLength = 40 )
        address = xml( type = Address )

Classes and properties may also carry the declaration in their documentation, as a line
reading ``@xml`` or ``@xml({...})`` (a JSON object) in the class docstring or in the
docstring of a ``property`` getter.  An empty declaration opts the class or property in
with every default.

Property options:

    ``as``        - ``"attr"`` or ``"element"`` (default); ``as_`` is accepted as well.
    ``name``      - the XML name to use instead of the property name.
    ``nameFrom``  - ``"child"``: nested values supply their own element name.
    ``nil``       - ``True`` writes ``None`` as ``<name xsi:nil="true"/>``, ``False`` omits it.
    ``maxLength`` - truncate written text to this many characters.
    ``getter``/``setter`` - names of the accessor methods to use.
    ``type``      - the class of nested values (otherwise taken from the setter's type hint).

Class options: ``name`` (element name), ``defaultSetter`` (method receiving children that
match no property) and ``skipWhenEmpty`` (omit ``None`` values unless a property says
otherwise).
"""
import inspect, json, logging, operator, re, types, typing

from xoma.errors import MalformedAnnotation, InvalidSanitizerConfig
from xoma.identity import resolve_type

__all__ = [ 'xml', 'resolve', 'summarize', 'PropertyMetadata', 'ClassOptions', 'ClassMetadata'
    , 'ATTRIBUTE', 'ELEMENT' ]

logger = logging.getLogger( __name__ )

ATTRIBUTE = "attr"
ELEMENT = "element"

# attribute under which a class decorator stores its declaration.
CLASS_SLOT = "__xoma__"

MARKER = re.compile( r"^\s*@xml(?:\((.*)\))?\s*$", re.M )

# Optional[X] and X | None
UNIONS = ( typing.Union, getattr( types, 'UnionType', typing.Union ) )

# accepted spellings -> canonical option names.
PROPERTY_KEYS = { 'as' : 'placement', 'as_' : 'placement', 'placement' : 'placement', 'name' : 'name'
    , 'nameFrom' : 'name_from', 'name_from' : 'name_from', 'nil' : 'nil'
    , 'maxLength' : 'max_length', 'max_length' : 'max_length'
    , 'getter' : 'getter', 'setter' : 'setter', 'type' : 'type' }
CLASS_KEYS = { 'name' : 'name', 'defaultSetter' : 'default_setter', 'default_setter' : 'default_setter'
    , 'skipWhenEmpty' : 'skip_when_empty', 'skip_when_empty' : 'skip_when_empty' }

class XmlDeclaration ( object ) :
    r"""The raw options of one :func:`xml` declaration.  Used in a class body it marks a
    property; called on a class it marks that class."""
    __slots__ = ( 'options', )
    def __init__ ( self, options ) :
        self.options = options

    def __call__ ( self, klass ) :
        if not inspect.isclass( klass ) :
            raise MalformedAnnotation( "xml() can only decorate classes, not %r" % ( klass, ) )
        setattr( klass, CLASS_SLOT, self )
        return klass

    def __get__ ( self, instance, owner ) :
        if instance is None :
            return self
        raise AttributeError( "'%s' object has no value for this declared property" % owner.__name__ )

    def __repr__ ( self ) :
        return "<xml:%r>" % ( self.options, )

def xml ( *args, **options ) :
    r"""Declare a property (in a class body) or a class (as a decorator).  Options are
    given as keywords, as a single dict (for keys such as ``as`` that are not valid
    identifiers), or both."""
    if len( args ) == 1 and inspect.isclass( args[0] ) and not options :
        return XmlDeclaration( {} )( args[0] )
    if len( args ) > 1 or ( args and not isinstance( args[0], dict ) ) :
        raise MalformedAnnotation( "xml() takes a single dict of options, got %r" % ( args, ) )
    merged = dict( args[0] ) if args else {}
    merged.update( options )
    return XmlDeclaration( merged )

class _Frozen ( object ) :
    __slots__ = ()
    def __init__ ( self, **kwargs ) :
        for slot in self.__slots__ :
            object.__setattr__( self, slot, kwargs.get( slot ) )

    def __setattr__ ( self, name, value ) :
        raise AttributeError( "%s is read-only" % self.__class__.__name__ )

    def _replace ( self, **changes ) :
        values = dict( ( slot, getattr( self, slot ) ) for slot in self.__slots__ if not slot.startswith( '_' ) )
        values.update( changes )
        return self.__class__( **values )

    def __repr__ ( self ) :
        return "<" + self.__class__.__name__ + ":" + ",".join( slot + "=" + repr( getattr( self, slot ) )
            for slot in self.__slots__ if not slot.startswith( '_' ) and getattr( self, slot ) is not None ) + ">"

class PropertyMetadata ( _Frozen ) :
    r"""How one property is written to and read from XML.  ``reader`` and ``writer`` are
    only filled in once the property is bound to its class by :func:`summarize`."""
    __slots__ = ( 'field_name', 'xml_name', 'placement', 'nil', 'max_length', 'name_from_child'
        , 'getter', 'setter', 'value_type', 'reader', 'writer' )

    @property
    def is_attribute ( self ) :
        return self.placement == ATTRIBUTE

class ClassOptions ( _Frozen ) :
    __slots__ = ( 'name', 'default_setter', 'skip_when_empty' )

class ClassMetadata ( _Frozen ) :
    r"""Everything needed to map one class: its options and its declared properties in
    declaration order, with attribute and element properties indexed by XML name."""
    __slots__ = ( 'klass', 'name', 'options', 'properties', '_attributes', '_elements' )
    def __init__ ( self, **kwargs ) :
        _Frozen.__init__( self, **kwargs )
        object.__setattr__( self, '_attributes', self._index( True ) )
        object.__setattr__( self, '_elements', self._index( False ) )

    def _index ( self, attributes ) :
        index = {}
        for meta in self.properties :
            if meta.is_attribute == attributes :
                # first declaration wins when two properties share an XML name.
                index.setdefault( meta.xml_name, meta )
        return index

    def attribute_index ( self ) :
        return dict( self._attributes )

    def element_index ( self ) :
        return dict( self._elements )

    def attributes ( self ) :
        return tuple( meta for meta in self.properties if meta.is_attribute )

    def elements ( self ) :
        return tuple( meta for meta in self.properties if not meta.is_attribute )

def _docstring_options ( doc, where ) :
    if not doc :
        return None
    match = MARKER.search( doc )
    if not match :
        return None
    payload = ( match.group( 1 ) or "" ).strip()
    if not payload :
        return {}
    if not payload.startswith( '{' ) :
        payload = "{" + payload + "}"
    try :
        options = json.loads( payload )
    except ValueError as ex :
        raise MalformedAnnotation( "Cannot parse xml annotation of %s: %s" % ( where, ex ), payload = payload )
    if not isinstance( options, dict ) :
        raise MalformedAnnotation( "xml annotation of %s is not an object" % where, payload = payload )
    return options

def _canonical ( options, keys, where ) :
    out = {}
    for key, value in options.items() :
        if key not in keys :
            raise MalformedAnnotation( "Unknown xml option '%s' on %s" % ( key, where ), option = key )
        out[keys[key]] = value
    return out

def _check ( where, key, value, kinds, choices = None ) :
    if value is None :
        return value
    if isinstance( value, bool ) and bool not in kinds :
        kinds = ()
    if not isinstance( value, kinds ) or ( choices and value not in choices ) :
        raise MalformedAnnotation( "Invalid value %r for xml option '%s' on %s" % ( value, key, where ), option = key )
    return value

def _property_metadata ( field_name, options ) :
    where = "property '%s'" % field_name
    opts = _canonical( options, PROPERTY_KEYS, where )
    placement = _check( where, 'as', opts.get( 'placement' ), ( str, ), ( ATTRIBUTE, ELEMENT ) ) or ELEMENT
    max_length = _check( where, 'maxLength', opts.get( 'max_length' ), ( int, ) )
    if max_length is not None and max_length <= 0 :
        raise InvalidSanitizerConfig( "Incorrect maxLength value for '%s': %r" % ( field_name, max_length )
            , field = field_name, max_length = max_length )
    kind = opts.get( 'type' )
    if kind is not None and not ( inspect.isclass( kind ) or isinstance( kind, str ) ) :
        raise MalformedAnnotation( "Invalid value %r for xml option 'type' on %s" % ( kind, where ), option = 'type' )
    return PropertyMetadata( field_name = field_name
        , xml_name = _check( where, 'name', opts.get( 'name' ), ( str, ) ) or field_name
        , placement = placement
        , nil = _check( where, 'nil', opts.get( 'nil' ), ( bool, ) )
        , max_length = max_length
        , name_from_child = _check( where, 'nameFrom', opts.get( 'name_from' ), ( str, ), ( 'child', ) ) == 'child'
        , getter = _check( where, 'getter', opts.get( 'getter' ), ( str, ) )
        , setter = _check( where, 'setter', opts.get( 'setter' ), ( str, ) )
        , value_type = kind )

def _class_options ( klass, options ) :
    where = "class '%s'" % klass.__name__
    opts = _canonical( options, CLASS_KEYS, where )
    return ClassOptions( name = _check( where, 'name', opts.get( 'name' ), ( str, ) )
        , default_setter = _check( where, 'defaultSetter', opts.get( 'default_setter' ), ( str, ) )
        , skip_when_empty = _check( where, 'skipWhenEmpty', opts.get( 'skip_when_empty' ), ( bool, ) ) )

def resolve ( target, field_name = None ) :
    r"""Resolve the declaration on ``target``.

    For a class, returns its :class:`ClassOptions` (or ``None`` if it is undeclared).
    For a class attribute (an :func:`xml` declaration or a ``property`` whose getter
    docstring carries the marker) named ``field_name``, returns its unbound
    :class:`PropertyMetadata` (or ``None``)."""
    if inspect.isclass( target ) :
        declared = vars( target ).get( CLASS_SLOT )
        if isinstance( declared, XmlDeclaration ) :
            return _class_options( target, declared.options )
        options = _docstring_options( vars( target ).get( '__doc__' ), "class '%s'" % target.__name__ )
        return None if options is None else _class_options( target, options )
    if isinstance( target, XmlDeclaration ) :
        return _property_metadata( field_name, target.options )
    if isinstance( target, property ) and target.fget is not None :
        options = _docstring_options( target.fget.__doc__, "property '%s'" % field_name )
        return None if options is None else _property_metadata( field_name, options )
    return None

def _method ( klass, meta, name, explicit ) :
    if name is not None and callable( getattr( klass, name, None ) ) :
        return name
    if explicit :
        raise MalformedAnnotation( "%s.%s names accessor '%s' which does not exist"
            % ( klass.__name__, meta.field_name, name ), field = meta.field_name, accessor = name )
    return None

def _reader ( klass, meta, attr ) :
    name = _method( klass, meta, meta.getter or "get_" + meta.field_name, meta.getter is not None )
    if name :
        return operator.methodcaller( name )
    if isinstance( attr, property ) and attr.fget is not None :
        return operator.attrgetter( meta.field_name )
    return None

def _setter_hint ( function ) :
    try :
        hints = typing.get_type_hints( function )
        params = [ p for p in inspect.signature( function ).parameters.values() if p.name != 'self' ]
    except NameError as ex :
        raise MalformedAnnotation( "Cannot resolve type hints of %r: %s" % ( function, ex ) )
    except ( TypeError, ValueError ) :
        # builtins and other callables without an introspectable signature
        return None
    if not params :
        return None
    hint = hints.get( params[0].name )
    if typing.get_origin( hint ) in UNIONS :
        args = [ a for a in typing.get_args( hint ) if a is not type( None ) ]
        hint = args[0] if len( args ) == 1 else None
    return hint if inspect.isclass( hint ) else None

def _writer ( klass, meta, attr ) :
    name = _method( klass, meta, meta.setter or "set_" + meta.field_name, meta.setter is not None )
    if name :
        return ( lambda obj, value : getattr( obj, name )( value ) ), _setter_hint( getattr( klass, name ) )
    if isinstance( attr, property ) and attr.fset is not None :
        return ( lambda obj, value : setattr( obj, meta.field_name, value ) ), _setter_hint( attr.fset )
    return None, None

def _bind ( klass, meta, attr ) :
    reader = _reader( klass, meta, attr )
    writer, hint = _writer( klass, meta, attr )
    kind = meta.value_type
    if isinstance( kind, str ) :
        kind = resolve_type( kind )
    return meta._replace( reader = reader, writer = writer, value_type = kind or hint )

def summarize ( klass ) :
    r"""Build the :class:`ClassMetadata` of ``klass``: class options plus every declared
    property (inherited ones first, in declaration order) bound to its accessors."""
    declared = {}
    for base in reversed( inspect.getmro( klass ) ) :
        for name, attr in vars( base ).items() :
            if name.startswith( '__' ) :
                continue
            # nested classes and class aliases are never properties, declared or not.
            meta = resolve( attr, name ) if isinstance( attr, ( XmlDeclaration, property ) ) else None
            if meta is not None :
                declared[name] = ( meta, attr )
            elif name in declared :
                # redefined without a declaration in a subclass: no longer mapped.
                del declared[name]
    properties = tuple( _bind( klass, meta, attr ) for meta, attr in declared.values() )
    options = resolve( klass ) or ClassOptions()
    logger.debug( "summarized %s: %d mapped properties", klass.__qualname__, len( properties ) )
    return ClassMetadata( klass = klass, name = options.name or klass.__name__, options = options, properties = properties )

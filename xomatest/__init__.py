import unittest
import xml.etree.ElementTree as ET
from enum import Enum

from xoma import xml, XSI

NIL = "{%s}nil" % XSI
TYPE = "{%s}type" % XSI

class DefaultTestCase ( unittest.TestCase ) :
    def _perform ( self, data, expected = None ) :
        if expected is None :
            expected = data
        _marshal = self.marshal( data )
        result = self.unmarshal( _marshal )
        if result != expected :
            print( ">>", expected )
            print( "<<", result )
            print( _marshal )
        self.assertEqual( result, expected )
        return result

    def _tree ( self, text ) :
        self.assertTrue( text.startswith( '<?xml version="1.0" encoding="UTF-8"?>' ) )
        return ET.fromstring( text )

class Comparable ( object ) :
    def __eq__ ( self, other ) :
        return type( self ) is type( other ) and vars( self ) == vars( other )
    def __ne__ ( self, other ) :
        return not self == other
    def __repr__ ( self ) :
        return "<%s:%s>" % ( self.__class__.__name__, ",".join( "%s=%r" % item for item in sorted( vars( self ).items() ) ) )

class Address ( Comparable ) :
    kind = xml( { "as" : "attr" } )
    street = xml()
    city = xml( maxLength = 10 )
    def __init__ ( self, street = None, city = None, kind = "home" ) :
        self._street = street
        self._city = city
        self._kind = kind
    def get_kind ( self ) :
        return self._kind
    def set_kind ( self, kind ) :
        self._kind = kind
    def get_street ( self ) :
        return self._street
    def set_street ( self, street ) :
        self._street = street
    def get_city ( self ) :
        return self._city
    def set_city ( self, city ) :
        self._city = city

class Person ( Comparable ) :
    id = xml( { "as" : "attr" } )
    name = xml()
    nickname = xml( nil = True )
    address = xml()
    def __init__ ( self, id = None, name = None, nickname = None, address = None ) :
        self._id = id
        self._name = name
        self._nickname = nickname
        self._address = address
    def get_id ( self ) :
        return self._id
    def set_id ( self, id : int ) :
        self._id = id
    def get_name ( self ) :
        return self._name
    def set_name ( self, name ) :
        self._name = name
    def get_nickname ( self ) :
        return self._nickname
    def set_nickname ( self, nickname ) :
        self._nickname = nickname
    def get_address ( self ) :
        return self._address
    def set_address ( self, address : Address ) :
        self._address = address

@xml( name = "human" )
class Human ( Comparable ) :
    name = xml()
    def __init__ ( self ) :
        self._name = None
    def get_name ( self ) :
        return self._name
    def set_name ( self, name ) :
        self._name = name

class Extra ( Comparable ) :
    value = xml( type = int )
    def __init__ ( self, value = None ) :
        self._value = value
    def get_value ( self ) :
        return self._value
    def set_value ( self, value ) :
        self._value = value

@xml( defaultSetter = "add_item" )
class Basket ( Comparable ) :
    owner = xml( { "as" : "attr" } )
    def __init__ ( self ) :
        self._owner = None
        self.items = []
    def get_owner ( self ) :
        return self._owner
    def set_owner ( self, owner ) :
        self._owner = owner
    def add_item ( self, item ) :
        self.items.append( item )

class Article ( Comparable ) :
    title = xml( maxLength = 5 )
    def __init__ ( self, title = None ) :
        self._title = title
    def get_title ( self ) :
        return self._title
    def set_title ( self, title ) :
        self._title = title

class Note ( Comparable ) :
    r"""A note whose mapping lives in its documentation.

    @xml({"name": "memo", "skipWhenEmpty": false})
    """
    def __init__ ( self, subject = None, body = None, words = None ) :
        self._subject = subject
        self._body = body
        self._words = words

    @property
    def subject ( self ) :
        """@xml({"as": "attr", "name": "about"})"""
        return self._subject

    @subject.setter
    def subject ( self, subject ) :
        self._subject = subject

    @property
    def body ( self ) :
        """@xml"""
        return self._body

    @body.setter
    def body ( self, body ) :
        self._body = body

    @property
    def words ( self ) :
        """Not mapped."""
        return self._words

class Money ( object ) :
    def __init__ ( self, text ) :
        self.amount, self.currency = text.split()
    def __str__ ( self ) :
        return "%s %s" % ( self.amount, self.currency )
    def __eq__ ( self, other ) :
        return isinstance( other, Money ) and str( self ) == str( other )

class Opaque ( object ) :
    pass

class Invoice ( Comparable ) :
    total = xml( { "as" : "attr", "type" : Money } )
    codes = xml( { "as" : "attr" } )
    lines = xml( name = "line" )
    paid = xml( type = bool )
    def __init__ ( self, total = None, codes = None, lines = None, paid = None ) :
        self._total = total
        self._codes = codes
        self._lines = lines
        self._paid = paid
    def get_total ( self ) :
        return self._total
    def set_total ( self, total ) :
        self._total = total
    def get_codes ( self ) :
        return self._codes
    def set_codes ( self, codes ) :
        self._codes = codes
    def get_lines ( self ) :
        return self._lines
    def set_lines ( self, line ) :
        self._lines = ( self._lines or [] ) + [ line ]
    def get_paid ( self ) :
        return self._paid
    def set_paid ( self, paid ) :
        self._paid = paid

class Shape ( Comparable ) :
    label = xml( { "as" : "attr" } )
    def __init__ ( self, label = None ) :
        self._label = label
    def get_label ( self ) :
        return self._label
    def set_label ( self, label ) :
        self._label = label

class Circle ( Shape ) :
    radius = xml( type = float )
    def __init__ ( self, label = None, radius = None ) :
        Shape.__init__( self, label )
        self._radius = radius
    def get_radius ( self ) :
        return self._radius
    def set_radius ( self, radius ) :
        self._radius = radius

@xml( defaultSetter = "set_shape" )
class Drawing ( Comparable ) :
    shape = xml( nameFrom = "child" )
    def __init__ ( self, shape = None ) :
        self._shape = shape
    def get_shape ( self ) :
        return self._shape
    def set_shape ( self, shape ) :
        self._shape = shape

class Link ( object ) :
    next = xml()
    def __init__ ( self ) :
        self._next = None
    def get_next ( self ) :
        return self._next
    def set_next ( self, link ) :
        self._next = link

class Outer ( object ) :
    class Inner ( Comparable ) :
        pass

class Colour ( str, Enum ) :
    RED = "red"
    BLUE = "blue"

class Paint ( Comparable ) :
    colour = xml()
    shade = xml( { "as" : "attr" } )
    def __init__ ( self, colour = None, shade = None ) :
        self._colour = colour
        self._shade = shade
    def get_colour ( self ) :
        return self._colour
    def set_colour ( self, colour : Colour ) :
        self._colour = colour
    def get_shade ( self ) :
        return self._shade
    def set_shade ( self, shade : Colour ) :
        self._shade = shade

class Holder ( Comparable ) :
    kind = Human
    label = xml()
    @xml( name = "part" )
    class Part ( object ) :
        pass
    def __init__ ( self, label = None ) :
        self._label = label
    def get_label ( self ) :
        return self._label
    def set_label ( self, label ) :
        self._label = label

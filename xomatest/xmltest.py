#!/usr/bin/env python
#    xomatest/xmltest.py - round trip test cases for Xoma over XML
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
import unittest
from decimal import Decimal

from xoma import xml
from xoma.XML import dumps, loads, marshal, unmarshal, Serializer
import xomatest
from xomatest import Address, Person, Invoice, Money, Note, Circle, Drawing, Article
from xomatest import Colour, Paint

class Account ( xomatest.Comparable ) :
    balance = xml( type = Decimal )
    def __init__ ( self, balance = None ) :
        self._balance = balance
    def get_balance ( self ) :
        return self._balance
    def set_balance ( self, balance ) :
        self._balance = balance

MAPPED = { "memo" : Note, "Account" : Account }

class XomaRoundTripTests ( xomatest.DefaultTestCase ) :
    def setUp ( self ) :
        self.marshal = lambda o : dumps( o )
        self.unmarshal = lambda s : loads( s, classesNamespace = "xomatest", mapperClasses = MAPPED )

    def testFlat ( self ) :
        """Attributes and scalar elements survive a round trip"""
        self._perform( Person( 12, "Ann" ) )

    def testNested ( self ) :
        self._perform( Person( 1, "Ann", "Annie", Address( "Main St 1", "Springfiel", "work" ) ) )

    def testNil ( self ) :
        self._perform( Note( "subject", None ) )

    def testPropertiesAndAttributeObjects ( self ) :
        self._perform( Invoice( Money( "12.50 EUR" ), None, [ "first", "second" ], False ) )

    def testNameFromChild ( self ) :
        self._perform( Drawing( Circle( "round", 0.5 ) ) )

    def testEnums ( self ) :
        self._perform( Paint( Colour.BLUE, Colour.RED ) )

    def testDecimal ( self ) :
        self._perform( Account( Decimal( "10.05" ) ) )

    def testTruncatedValue ( self ) :
        """Overlong text comes back truncated"""
        self._perform( Article( "HelloWorld" ), Article( "Hello" ) )

    def testEscape ( self ) :
        """Text that needs escaping in XML"""
        self._perform( Person( 2, "<Ann & \"Bob\">" ) )

    def testUnicode ( self ) :
        self._perform( Person( 3, "Zoë Ångström" ) )

    def testStable ( self ) :
        """A document serialized, read and serialized again is unchanged"""
        person = Person( 5, "Ann", None, Address( "x", "y" ) )
        text = dumps( person )
        self.assertEqual( dumps( self.unmarshal( text ) ), text )

class XomaTreeTests ( xomatest.DefaultTestCase ) :
    def setUp ( self ) :
        self.marshal = marshal
        self.unmarshal = lambda t : unmarshal( t, classesNamespace = "xomatest" )

    def testTree ( self ) :
        self._perform( Person( 1, "Ann", address = Address( "Main" ) ) )

    def testSharedSerializer ( self ) :
        s = Serializer( classesNamespace = "xomatest" )
        person = Person( 9, "Cy" )
        self.assertEqual( s.unmarshal( s.marshal( person ) ), person )
        self.assertIn( Person, s.cache )

if __name__ == "__main__" :
    unittest.main()

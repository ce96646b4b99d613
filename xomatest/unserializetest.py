import unittest
import xml.etree.ElementTree as ET

from xoma import Serializer, xml, ClassNotFound, MissingTypeAttribute, UnknownAttribute, UnknownElement
from xoma import MissingMutator, MalformedXml, InvalidValue
import xomatest
from xomatest import Address, Person, Human, Basket, Extra, Invoice, Money, Note, Circle, Drawing
from xomatest import Opaque, Colour, Paint, Holder

XSI_DECL = 'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"'

class Recorder ( object ) :
    r"""Remembers the order its setters were called in."""
    first = xml( { "as" : "attr" } )
    second = xml()
    def __init__ ( self ) :
        self.calls = []
    def set_first ( self, value ) :
        self.calls.append( ( "first", value ) )
    def set_second ( self, value ) :
        self.calls.append( ( "second", value ) )

class Failing ( object ) :
    name = xml()
    built = []
    def __init__ ( self ) :
        Failing.built.append( self )
    def set_name ( self, value ) :
        raise ValueError( "refused" )

class UnserializeTests ( xomatest.DefaultTestCase ) :
    def setUp ( self ) :
        self.serializer = Serializer( classesNamespace = "xomatest" )

    def testSimple ( self ) :
        person = self.serializer.unserialize( '<Person id="4"><name>Ann</name></Person>' )
        self.assertIsInstance( person, Person )
        self.assertEqual( person.get_id(), 4 )
        self.assertEqual( person.get_name(), "Ann" )
        self.assertIsNone( person.get_address() )

    def testNested ( self ) :
        person = self.serializer.unserialize( '<Person><address kind="work"><street>Main</street><city>Town</city></address></Person>' )
        self.assertEqual( person.get_address(), Address( "Main", "Town", "work" ) )

    def testNestedByHintNotTag ( self ) :
        """the nested class comes from the setter's hint, not from the child's tag"""
        person = self.serializer.unserialize( '<Person><address><street>x</street></address></Person>' )
        self.assertIsInstance( person.get_address(), Address )

    def testConstructorDefaultsKept ( self ) :
        address = self.serializer.unserialize( '<Address><street>x</street></Address>' )
        self.assertEqual( address.get_kind(), "home" )
        self.assertIsNone( address.get_city() )

    def testMapperOverride ( self ) :
        s = Serializer( extractClassFrom = "tagName", mapperClasses = { "person" : "xomatest.Human" } )
        human = s.unserialize( "<person><name>Ann</name></person>" )
        self.assertIsInstance( human, Human )
        self.assertEqual( human.get_name(), "Ann" )

    def testDefaultSetter ( self ) :
        s = Serializer( mapperClasses = { "root" : Basket, "extra" : Extra } )
        basket = s.unserialize( "<root><extra>1</extra></root>" )
        self.assertEqual( len( basket.items ), 1 )
        self.assertIsInstance( basket.items[0], Extra )

    def testDefaultSetterNested ( self ) :
        basket = self.serializer.unserialize( '<Basket owner="me"><Extra><value>1</value></Extra><Extra><value>2</value></Extra></Basket>' )
        self.assertEqual( basket.get_owner(), "me" )
        self.assertEqual( basket.items, [ Extra( 1 ), Extra( 2 ) ] )

    def testDefaultSetterTakesAttributes ( self ) :
        """an unmatched attribute is deserialized as an element named after it"""
        s = Serializer( classesNamespace = "xomatest", skipUnknownObjects = False )
        basket = s.unserialize( '<Basket owner="me" Extra="1"/>' )
        self.assertEqual( basket.get_owner(), "me" )
        self.assertEqual( basket.items, [ Extra() ] )

    def testDefaultSetterUnknownAttributeClass ( self ) :
        s = Serializer( classesNamespace = "xomatest", skipUnknownObjects = False )
        self.assertRaises( ClassNotFound, s.unserialize, '<Basket colour="red"/>' )

    def testDefaultSetterUnknownClass ( self ) :
        self.assertRaises( ClassNotFound, self.serializer.unserialize, '<Basket><nothing/></Basket>' )

    def testLenientByDefault ( self ) :
        person = self.serializer.unserialize( '<Person colour="red"><name>Ann</name><shoe>9</shoe></Person>' )
        self.assertEqual( person.get_name(), "Ann" )

    def testStrictAttribute ( self ) :
        s = Serializer( classesNamespace = "xomatest", skipUnknownObjects = False )
        self.assertRaises( UnknownAttribute, s.unserialize, '<Person colour="red"/>' )

    def testStrictElement ( self ) :
        s = Serializer( classesNamespace = "xomatest", skipUnknownObjects = False )
        self.assertRaises( UnknownElement, s.unserialize, '<Person><shoe>9</shoe></Person>' )

    def testStrictIgnoresSchemaInstanceAttributes ( self ) :
        s = Serializer( classesNamespace = "xomatest", skipUnknownObjects = False )
        person = s.unserialize( '<Person %s xsi:type="Person" id="1"/>' % XSI_DECL )
        self.assertEqual( person.get_id(), 1 )

    def testClassNotFound ( self ) :
        self.assertRaises( ClassNotFound, self.serializer.unserialize, "<Nobody><name>x</name></Nobody>" )
        self.assertRaises( ClassNotFound, Serializer().unserialize, "<Person/>" )

    def testNoPartialInstance ( self ) :
        """an error half way through a document leaves nothing behind for the caller"""
        s = Serializer( mapperClasses = { "failing" : Failing } )
        del Failing.built[:]
        self.assertRaises( ValueError, s.unserialize, "<failing><name>x</name></failing>" )
        self.assertEqual( len( Failing.built ), 1 )

    def testTypeAttribute ( self ) :
        s = Serializer( extractClassFrom = "typeAttribute", classesNamespace = "xomatest" )
        circle = s.unserialize( '<shape %s xsi:type="Circle" label="c"><radius>1.5</radius></shape>' % XSI_DECL )
        self.assertEqual( circle, Circle( "c", 1.5 ) )

    def testMissingTypeAttribute ( self ) :
        s = Serializer( extractClassFrom = "typeAttribute", classesNamespace = "xomatest" )
        self.assertRaises( MissingTypeAttribute, s.unserialize, '<Circle label="c"/>' )

    def testAttributesBeforeChildren ( self ) :
        s = Serializer( mapperClasses = { "r" : Recorder } )
        recorder = s.unserialize( '<r first="a"><second>b</second><second>c</second></r>' )
        self.assertEqual( recorder.calls, [ ( "first", "a" ), ( "second", "b" ), ( "second", "c" ) ] )

    def testMissingSetter ( self ) :
        class ReadOnly ( object ) :
            name = xml()
            def get_name ( self ) :
                return "fixed"
        s = Serializer( mapperClasses = { "ro" : ReadOnly } )
        self.assertRaises( MissingMutator, s.unserialize, "<ro><name>x</name></ro>" )
        self.assertIsInstance( s.unserialize( "<ro/>" ), ReadOnly )

    def testMissingDefaultSetter ( self ) :
        @xml( defaultSetter = "absorb" )
        class Sponge ( object ) :
            pass
        s = Serializer( mapperClasses = { "sponge" : Sponge, "drop" : Extra } )
        self.assertRaises( MissingMutator, s.unserialize, "<sponge><drop/></sponge>" )

    def testNil ( self ) :
        person = self.serializer.unserialize( '<Person %s><nickname xsi:nil="true"/></Person>' % XSI_DECL )
        self.assertIsNone( person.get_nickname() )
        person = self.serializer.unserialize( '<Person><nickname/></Person>' )
        self.assertEqual( person.get_nickname(), "" )

    def testTypedValues ( self ) :
        invoice = self.serializer.unserialize( '<Invoice total="5 USD"><paid>true</paid><line>a</line><line>b</line></Invoice>' )
        self.assertEqual( invoice.get_total(), Money( "5 USD" ) )
        self.assertIs( invoice.get_paid(), True )
        self.assertEqual( invoice.get_lines(), [ "a", "b" ] )

    def testPropertyAccessors ( self ) :
        note = self.serializer.unserialize( '<memo about="s"><body>text</body></memo>', Note )
        self.assertEqual( note.subject, "s" )
        self.assertEqual( note.body, "text" )

    def testHintForRoot ( self ) :
        address = self.serializer.unserialize( '<anything><street>x</street></anything>', Address )
        self.assertEqual( address, Address( "x" ) )

    def testInputForms ( self ) :
        text = '<Person><name>Ann</name></Person>'
        for data in ( text, text.encode( "utf-8" ), ET.fromstring( text ), ET.ElementTree( ET.fromstring( text ) ) ) :
            self.assertEqual( self.serializer.unserialize( data ).get_name(), "Ann" )

    def testUnsupportedInput ( self ) :
        self.assertRaises( TypeError, self.serializer.unserialize, 42 )

    def testMalformedXml ( self ) :
        for data in ( "<Person><name>Ann</Person>", "", "not xml at all" ) :
            self.assertRaises( MalformedXml, self.serializer.unserialize, data )

    def testCommentsIgnored ( self ) :
        parser = ET.XMLParser( target = ET.TreeBuilder( insert_comments = True ) )
        parser.feed( "<Person><!-- who --><name>Ann</name></Person>" )
        element = parser.close()
        s = Serializer( classesNamespace = "xomatest", skipUnknownObjects = False )
        self.assertEqual( s.unserialize( element ).get_name(), "Ann" )

    def testNameFromChildViaDefaultSetter ( self ) :
        drawing = self.serializer.unserialize( '<Drawing><Circle label="c"><radius>2</radius></Circle></Drawing>' )
        self.assertEqual( drawing.get_shape(), Circle( "c", 2.0 ) )

    def testEmptyTypedText ( self ) :
        """empty text for a non-string type reads as None"""
        self.assertIsNone( self.serializer.unserialize( '<Person id=""/>' ).get_id() )
        self.assertIsNone( self.serializer.unserialize( '<Extra><value/></Extra>' ).get_value() )

    def testInvalidTypedText ( self ) :
        with self.assertRaises( InvalidValue ) as caught :
            self.serializer.unserialize( '<Extra><value>abc</value></Extra>' )
        self.assertEqual( caught.exception.details["field"], "value" )
        self.assertEqual( caught.exception.details["text"], "abc" )
        self.assertRaises( InvalidValue, self.serializer.unserialize, '<Person id="seven"/>' )
        self.assertRaises( InvalidValue, self.serializer.unserialize, '<Invoice><paid>maybe</paid></Invoice>' )

    def testEnumValues ( self ) :
        paint = self.serializer.unserialize( '<Paint shade="blue"><colour>red</colour></Paint>' )
        self.assertIs( paint.get_colour(), Colour.RED )
        self.assertIs( paint.get_shade(), Colour.BLUE )
        self.assertRaises( InvalidValue, self.serializer.unserialize, '<Paint><colour>green</colour></Paint>' )

    def testUnmappedClassNeedsNamespace ( self ) :
        """without a namespace a document name only reaches classes with a mapping"""
        self.assertRaises( ClassNotFound, Serializer().unserialize, '<builtins.dict/>' )
        self.assertRaises( ClassNotFound, Serializer().unserialize, '<xomatest.Opaque/>' )
        self.assertEqual( Serializer().unserialize( '<xomatest.Person id="2"/>' ).get_id(), 2 )
        self.assertIsInstance( Serializer( classesNamespace = "xomatest" ).unserialize( '<Opaque/>' ), Opaque )

    def testClassValuedAttributes ( self ) :
        s = Serializer( mapperClasses = { "holder" : Holder } )
        holder = s.unserialize( '<holder><label>x</label><kind>y</kind></holder>' )
        self.assertEqual( holder.get_label(), "x" )

if __name__ == "__main__" :
    unittest.main()

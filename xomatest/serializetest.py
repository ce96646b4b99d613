import unittest
import xml.etree.ElementTree as ET

from xoma import Serializer, xml, CycleDetected, NonScalarAttribute
import xomatest
from xomatest import NIL, Address, Person, Human, Article, Note, Invoice, Money, Opaque, Circle, Drawing, Link
from xomatest import Colour, Paint, Holder

class SerializeTests ( xomatest.DefaultTestCase ) :
    def setUp ( self ) :
        self.serializer = Serializer( classesNamespace = "xomatest" )

    def testDeclaration ( self ) :
        text = self.serializer.serialize( Article( "Hi" ) )
        self.assertEqual( text, '<?xml version="1.0" encoding="UTF-8"?>\n<Article><title>Hi</title></Article>' )

    def testTruncation ( self ) :
        """maxLength 5 cuts 'HelloWorld' down to 'Hello'"""
        tree = self._tree( self.serializer.serialize( Article( "HelloWorld" ) ) )
        self.assertEqual( tree.find( "title" ).text, "Hello" )

    def testElementName ( self ) :
        """explicit name, then the class name option, then the class name"""
        self.assertEqual( self._tree( self.serializer.serialize( Human() ) ).tag, "human" )
        self.assertEqual( self._tree( self.serializer.serialize( Human(), "being" ) ).tag, "being" )
        self.assertEqual( self._tree( self.serializer.serialize( Article() ) ).tag, "Article" )

    def testPlacement ( self ) :
        person = Person( 7, "Ann", "Annie", Address( "Main St 1", "Springfield" ) )
        tree = self._tree( self.serializer.serialize( person ) )
        self.assertEqual( tree.get( "id" ), "7" )
        self.assertIsNone( tree.find( "id" ) )
        self.assertIsNone( tree.get( "name" ) )
        self.assertEqual( [ child.tag for child in tree ], [ "name", "nickname", "address" ] )
        address = tree.find( "address" )
        self.assertEqual( address.get( "kind" ), "home" )
        self.assertEqual( address.find( "street" ).text, "Main St 1" )
        self.assertIsNone( address.find( "kind" ) )

    def testNestedTruncation ( self ) :
        tree = self._tree( self.serializer.serialize( Address( "x", "Springfield Gardens" ) ) )
        self.assertEqual( tree.find( "city" ).text, "Springfiel" )

    def testNullSkipped ( self ) :
        """None is omitted by default and attributes never carry a nil marker"""
        tree = self._tree( self.serializer.serialize( Address( "x", None, None ) ) )
        self.assertIsNone( tree.find( "city" ) )
        self.assertIsNone( tree.get( "kind" ) )

    def testNullMarkedByProperty ( self ) :
        """a property declared nil = True writes None as an empty nil element"""
        tree = self._tree( self.serializer.serialize( Person( name = "Ann" ) ) )
        nickname = tree.find( "nickname" )
        self.assertEqual( nickname.get( NIL ), "true" )
        self.assertIsNone( nickname.text )
        self.assertEqual( len( nickname ), 0 )
        self.assertIsNone( tree.find( "address" ) )

    def testNullMarkedByClass ( self ) :
        tree = self._tree( self.serializer.serialize( Note( subject = "s" ) ) )
        self.assertEqual( tree.tag, "memo" )
        self.assertEqual( tree.get( "about" ), "s" )
        self.assertEqual( tree.find( "body" ).get( NIL ), "true" )

    def testNullMarkedBySession ( self ) :
        self.serializer.config( skipWhenEmpty = False )
        tree = self._tree( self.serializer.serialize( Address( "x", None ) ) )
        self.assertEqual( tree.find( "city" ).get( NIL ), "true" )

    def testPropertyOverridesClassNullPolicy ( self ) :
        @xml( skipWhenEmpty = False )
        class Quiet ( object ) :
            loud = xml()
            hush = xml( nil = False )
            def get_loud ( self ) :
                return None
            def get_hush ( self ) :
                return None
        tree = self._tree( self.serializer.serialize( Quiet() ) )
        self.assertEqual( [ child.tag for child in tree ], [ "loud" ] )

    def testAttributeStringification ( self ) :
        invoice = Invoice( total = Money( "10 EUR" ), codes = [ "A", "B", 3 ], paid = True )
        tree = self._tree( self.serializer.serialize( invoice ) )
        self.assertEqual( tree.get( "total" ), "10 EUR" )
        self.assertEqual( tree.get( "codes" ), "A B 3" )
        self.assertEqual( tree.find( "paid" ).text, "true" )

    def testNonScalarAttribute ( self ) :
        self.assertRaises( NonScalarAttribute, self.serializer.serialize, Invoice( total = Opaque() ) )

    def testSequenceElements ( self ) :
        tree = self._tree( self.serializer.serialize( Invoice( lines = [ "one", "two" ] ) ) )
        self.assertEqual( [ ( c.tag, c.text ) for c in tree.findall( "line" ) ], [ ( "line", "one" ), ( "line", "two" ) ] )

    def testNameFromChild ( self ) :
        tree = self._tree( self.serializer.serialize( Drawing( Circle( "c", 2.5 ) ) ) )
        circle = tree.find( "Circle" )
        self.assertIsNotNone( circle )
        self.assertIsNone( tree.find( "shape" ) )
        self.assertEqual( circle.get( "label" ), "c" )
        self.assertEqual( circle.find( "radius" ).text, "2.5" )

    def testPropertyNameWrapsNested ( self ) :
        tree = self._tree( self.serializer.serialize( Person( address = Address( "s" ) ) ) )
        self.assertEqual( tree.find( "address" ).find( "street" ).text, "s" )
        self.assertIsNone( tree.find( "Address" ) )

    def testMissingGetterSkipped ( self ) :
        class WriteOnly ( object ) :
            secret = xml()
            shown = xml()
            def set_secret ( self, value ) :
                pass
            def get_shown ( self ) :
                return "yes"
        tree = self._tree( self.serializer.serialize( WriteOnly() ) )
        self.assertEqual( [ child.tag for child in tree ], [ "shown" ] )

    def testUndeclaredNotWritten ( self ) :
        note = Note( body = "b", words = 12 )
        tree = self._tree( self.serializer.serialize( note ) )
        self.assertIsNone( tree.find( "words" ) )
        self.assertIsNone( tree.get( "words" ) )

    def testCycleDetected ( self ) :
        link = Link()
        link.set_next( Link() )
        link.get_next().set_next( link )
        self.assertRaises( CycleDetected, self.serializer.serialize, link )

    def testSelfCycle ( self ) :
        link = Link()
        link.set_next( link )
        self.assertRaises( CycleDetected, self.serializer.serialize, link )

    def testSharedReferenceIsNotACycle ( self ) :
        shared = Address( "same" )
        class Pair ( object ) :
            first = xml()
            second = xml()
            def get_first ( self ) :
                return shared
            def get_second ( self ) :
                return shared
        tree = self._tree( self.serializer.serialize( Pair() ) )
        self.assertEqual( tree.find( "first/street" ).text, "same" )
        self.assertEqual( tree.find( "second/street" ).text, "same" )

    def testUsableAfterCycle ( self ) :
        link = Link()
        link.set_next( link )
        encoder = self.serializer.encoder()
        self.assertRaises( CycleDetected, encoder.to_element, link )
        self.assertEqual( encoder.path, set() )

    def testIdempotent ( self ) :
        person = Person( 1, "Ann", None, Address( "Main", "Town", "work" ) )
        self.assertEqual( self.serializer.serialize( person ), self.serializer.serialize( person ) )
        self.assertEqual( self.serializer.serialize( person ), Serializer().serialize( person ) )

    def testParent ( self ) :
        root = ET.Element( "people" )
        self.serializer.serialize( Person( name = "Ann" ), parent = root )
        self.serializer.serialize( Person( name = "Bob" ), "human", root )
        self.assertEqual( [ child.tag for child in root ], [ "Person", "human" ] )
        self.assertEqual( root.find( "human/name" ).text, "Bob" )

    def testUnsupported ( self ) :
        for data in ( None, "text", 5, [ Person() ] ) :
            self.assertRaises( TypeError, self.serializer.serialize, data )

    def testMarshal ( self ) :
        tree = self.serializer.marshal( Article( "t" ) )
        self.assertIsInstance( tree, ET.ElementTree )
        self.assertEqual( tree.getroot().find( "title" ).text, "t" )

    def testEnumValues ( self ) :
        """str and int enums are written as their values"""
        tree = self._tree( self.serializer.serialize( Paint( Colour.RED, Colour.BLUE ) ) )
        self.assertEqual( tree.find( "colour" ).text, "red" )
        self.assertEqual( len( tree.find( "colour" ) ), 0 )
        self.assertEqual( tree.get( "shade" ), "blue" )

    def testClassValuedAttributes ( self ) :
        """nested classes and class aliases on a class are not properties"""
        tree = self._tree( self.serializer.serialize( Holder( "x" ) ) )
        self.assertEqual( [ ( child.tag, child.text ) for child in tree ], [ ( "label", "x" ) ] )

if __name__ == "__main__" :
    unittest.main()

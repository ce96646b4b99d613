import threading, time, unittest

from xoma import MetadataCache, ClassNotFound
from xoma.annotations import summarize
from xomatest import Person, Address

class CountingSummarizer ( object ) :
    def __init__ ( self, delay = 0 ) :
        self.calls = []
        self.delay = delay
    def __call__ ( self, klass ) :
        self.calls.append( klass )
        time.sleep( self.delay )
        return summarize( klass )

class MetadataCacheTests ( unittest.TestCase ) :
    def testMemoized ( self ) :
        """The same summary object is returned on every call"""
        counter = CountingSummarizer()
        cache = MetadataCache( counter )
        first = cache.get_summary( Person )
        self.assertIs( cache.get_summary( Person ), first )
        self.assertEqual( counter.calls, [ Person ] )

    def testPerClass ( self ) :
        cache = MetadataCache()
        self.assertIsNot( cache.get_summary( Person ), cache.get_summary( Address ) )
        self.assertEqual( len( cache ), 2 )
        self.assertIn( Person, cache )

    def testByName ( self ) :
        cache = MetadataCache()
        self.assertIs( cache.get_summary( "xomatest.Person" ), cache.get_summary( Person ) )
        self.assertEqual( len( cache ), 1 )

    def testUnknownName ( self ) :
        self.assertRaises( ClassNotFound, MetadataCache().get_summary, "xomatest.Nobody" )

    def testInstancesDoNotShare ( self ) :
        one, two = MetadataCache(), MetadataCache()
        self.assertIsNot( one.get_summary( Person ), two.get_summary( Person ) )

    def testClear ( self ) :
        cache = MetadataCache()
        cache.get_summary( Person )
        cache.clear()
        self.assertEqual( len( cache ), 0 )

    def testConcurrentPopulation ( self ) :
        """Threads racing for an uncached class summarize it once and see one result"""
        counter = CountingSummarizer( delay = 0.05 )
        cache = MetadataCache( counter )
        results = []
        threads = [ threading.Thread( target = lambda : results.append( cache.get_summary( Person ) ) ) for i in range( 8 ) ]
        for t in threads :
            t.start()
        for t in threads :
            t.join()
        self.assertEqual( len( counter.calls ), 1 )
        self.assertEqual( len( set( id( r ) for r in results ) ), 1 )

if __name__ == "__main__" :
    unittest.main()

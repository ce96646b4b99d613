#    xoma/cache.py - per-serializer class metadata cache.
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
r"""Memoized :class:`~xoma.annotations.ClassMetadata`, so a class is introspected once
rather than once per element.

Entries are populated once under a lock and never evicted or mutated; lookups of a
populated class take no lock and may be shared freely between threads.
"""
import logging, threading

from xoma.annotations import summarize
from xoma.identity import resolve_type

__all__ = [ 'MetadataCache' ]

logger = logging.getLogger( __name__ )

class MetadataCache ( object ) :
    def __init__ ( self, summarizer = summarize ) :
        self.summarizer = summarizer
        self.summaries = {}
        self.lock = threading.Lock()

    def get_summary ( self, klass ) :
        r"""Return the metadata of ``klass`` (a class, or a name :func:`resolve_type` knows)."""
        klass = resolve_type( klass )
        summary = self.summaries.get( klass )
        if summary is not None :
            return summary
        with self.lock :
            summary = self.summaries.get( klass )
            if summary is None :
                logger.debug( "caching metadata for %s", klass.__qualname__ )
                summary = self.summaries[klass] = self.summarizer( klass )
        return summary

    def clear ( self ) :
        with self.lock :
            self.summaries.clear()

    def __contains__ ( self, klass ) :
        return klass in self.summaries

    def __len__ ( self ) :
        return len( self.summaries )

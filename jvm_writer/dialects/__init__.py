"""
Output dialects supported by the source writer.

Java is the primary dialect; Scala and Kotlin are the alternates.
"""

from .policy import BUILTIN_DIALECTS, JAVA, KOTLIN, SCALA, DialectPolicy

__all__ = [
    "DialectPolicy",
    "JAVA",
    "SCALA",
    "KOTLIN",
    "BUILTIN_DIALECTS",
]

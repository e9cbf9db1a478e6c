"""
End-to-end tests for JavaWriter: the body is written, the writer is
closed and the finished file is checked.
"""

import pytest

from jvm_writer import JavaWriter, WriterConfig, WriterError
from jvm_writer.java_writer import IMPORT_STATEMENT, SERIAL_STATEMENT, java_string_hash


def write_book(writer):
    writer.print_package_specification("com.acme")
    writer.print_imports()
    writer.println("public class Book {")
    writer.println("private %s title;", writer.ref("java.lang.String"))
    writer.println("private %s ids;", writer.ref("java.util.List<java.lang.Integer>"))
    writer.println("}")


class TestJavaFile:
    def test_complete_file(self, make_writer, tmp_path):
        writer = make_writer("Book.java")
        write_book(writer)

        assert writer.close() is True

        expected = (
            "package com.acme;\n"
            "\n"
            "import java.util.List;\n"
            "\n"
            "public class Book {\n"
            "    private String title;\n"
            "    private List<Integer> ids;\n"
            "}\n"
        )
        assert writer.content == expected
        assert (tmp_path / "Book.java").read_text(encoding="utf-8") == expected

    def test_imports_are_grouped_by_top_level_package(self, java_writer):
        for name in (
            "org.jooq.Field",
            "java.util.Map",
            "com.other.Author",
            "java.util.List",
            "org.jooq.impl.DSL",
        ):
            java_writer.ref(name)
        java_writer.println("public class Book {}")
        java_writer.close()

        assert (
            "package com.acme;\n"
            "\n"
            "import com.other.Author;\n"
            "\n"
            "import java.util.List;\n"
            "import java.util.Map;\n"
            "\n"
            "import org.jooq.Field;\n"
            "import org.jooq.impl.DSL;\n"
            "\n"
            "public class Book {}\n"
        ) == java_writer.content

    def test_no_sentinels_left(self, java_writer):
        java_writer.println("public class Book {")
        java_writer.print_serial()
        java_writer.println("}")
        java_writer.close()

        assert IMPORT_STATEMENT not in java_writer.content
        assert SERIAL_STATEMENT not in java_writer.content

    def test_collision_in_file(self, java_writer):
        java_writer.println("public class Book {")
        java_writer.println("%s a;", java_writer.ref("com.a.Widget"))
        java_writer.println("%s b;", java_writer.ref("com.b.Widget"))
        java_writer.println("}")
        java_writer.close()

        assert "import com.a.Widget;" in java_writer.content
        assert "import com.b.Widget;" not in java_writer.content
        assert "    Widget a;" in java_writer.content
        assert "    com.b.Widget b;" in java_writer.content

    def test_no_self_import(self, make_writer):
        writer = make_writer("Table.java")
        writer.print_package_specification("com.acme")
        writer.print_imports()
        writer.println("public class Table {")
        writer.println("%s c;", writer.ref("com.acme.Table.TABLE.COLUMN", 3))
        writer.println("}")
        writer.close()

        assert "import" not in writer.content
        assert "    TABLE.COLUMN c;" in writer.content
        assert writer.imports == []

    def test_same_package_types_are_not_imported(self, java_writer):
        assert java_writer.ref("com.acme.Author") == "Author"
        assert java_writer.ref("com.acme.tables.Author2") == "Author2"
        java_writer.println("class Book {}")
        java_writer.close()

        assert "import com.acme.Author;" not in java_writer.content
        assert "import com.acme.tables.Author2;" in java_writer.content
        assert java_writer.imports == ["com.acme.tables.Author2"]
        assert java_writer.qualified_types == [
            "com.acme.Author",
            "com.acme.tables.Author2",
        ]

    def test_without_package_same_package_types_are_imported(self, make_writer):
        writer = make_writer("Book.java")
        writer.print_imports()
        writer.println("class Book { %s a; }", writer.ref("com.acme.Author"))
        writer.close()

        assert "import com.acme.Author;" in writer.content

    def test_java_lang_is_not_imported(self, java_writer):
        java_writer.ref("java.lang.Integer")
        java_writer.println("class Book {}")
        java_writer.close()

        assert "import" not in java_writer.content
        assert java_writer.bindings == {"Integer": "java.lang.Integer"}

    def test_excluded_types(self, make_writer):
        writer = make_writer("Book.java", fully_qualified_types=r"java\.sql\..*")

        assert writer.ref("java.sql.Timestamp") == "java.sql.Timestamp"
        assert writer.imports == []

    def test_print_class(self, java_writer):
        java_writer.print("class Book extends ").print_class("org.jooq.impl.TableImpl")
        java_writer.println(" {}")
        java_writer.close()

        assert "class Book extends TableImpl {}" in java_writer.content
        assert "import org.jooq.impl.TableImpl;" in java_writer.content

    def test_ref_all(self, java_writer):
        assert java_writer.ref_all(["org.jooq.Field", "org.jooq.Table"]) == [
            "Field",
            "Table",
        ]


class TestSerialVersion:
    def test_serial_is_hash_of_body(self, make_writer):
        writer = make_writer("Book.java")
        writer.print_package_specification("com.acme")
        writer.println("public class Book {")
        writer.print_serial()
        writer.println("}")

        body = (
            "package com.acme;\n"
            "public class Book {\n"
            "\n"
            f"    private static final long serialVersionUID = {SERIAL_STATEMENT};\n"
            "}\n"
        )
        writer.close()

        assert f"serialVersionUID = {java_string_hash(body)};" in writer.content

    def test_identical_bodies_give_identical_serials(self, tmp_path):
        contents = []
        for directory in ("a", "b"):
            writer = JavaWriter(tmp_path / directory / "Book.java")
            writer.println("public class Book {")
            writer.print_serial()
            writer.println("}")
            writer.close()
            contents.append(writer.content)

        assert contents[0] == contents[1]

    def test_no_serial_for_alternate_dialects(self, make_writer):
        for name in ("Book.scala", "Book.kt"):
            writer = make_writer(name)
            writer.println("class Book {")
            writer.print_serial()
            writer.println("}")
            writer.close()

            assert "serialVersionUID" not in writer.content


class TestJavaStringHash:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("", 0),
            ("a", 97),
            ("hello", 99162322),
            ("polygenelubricants", -2147483648),
        ],
    )
    def test_matches_java(self, text, expected):
        assert java_string_hash(text) == expected


class TestAlternateDialects:
    def test_kotlin_file(self, make_writer):
        writer = make_writer("Book.kt")
        writer.print_package_specification("com.acme")
        writer.print_imports()
        writer.println("class Book {")
        writer.println(
            "val ids: %s? = null", writer.ref("java.util.List<java.lang.Integer>")
        )
        writer.println("val names: %s", writer.ref("java.lang.String[]"))
        writer.println("}")
        writer.close()

        assert writer.content == (
            "package com.acme\n"
            "\n"
            "import java.util.List\n"
            "\n"
            "class Book {\n"
            "    val ids: List<Int>? = null\n"
            "    val names: Array<String?>\n"
            "}\n"
        )

    def test_kotlin_keeps_nested_kotlin_packages(self, make_writer):
        writer = make_writer("Book.kt")
        writer.ref("kotlin.collections.List")
        writer.ref("kotlin.Unit")

        assert writer.imports == ["kotlin.collections.List"]

    def test_scala_file(self, make_writer):
        writer = make_writer("Book.scala")
        writer.print_package_specification("com.acme")
        writer.print_imports()
        writer.println("class Book {")
        writer.println(
            "val names: %s = Nil",
            writer.ref("scala.collection.immutable.List[java.lang.String]"),
        )
        writer.println("}")
        writer.close()

        assert writer.content == (
            "package com.acme\n"
            "\n"
            "import java.lang.String\n"
            "\n"
            "import scala.collection.immutable.List\n"
            "\n"
            "class Book {\n"
            "  val names: List[String] = Nil\n"
            "}\n"
        )

    def test_scala_own_member_chain_keeps_class(self, make_writer):
        writer = make_writer("Table.scala")
        writer.print_package_specification("com.acme")

        assert writer.ref("com.acme.Table.TABLE.COLUMN", 3) == "Table.TABLE.COLUMN"


class TestJavadoc:
    def test_javadoc_block(self, java_writer):
        java_writer.println("public class Book {")
        java_writer.javadoc("The column <code>%s</code>.", "a */ b")
        java_writer.println("}")
        java_writer.close()

        assert (
            "public class Book {\n"
            "\n"
            "    /**\n"
            "     * The column <code>a * / b</code>.\n"
            "     */\n"
            "}\n"
        ) in java_writer.content

    def test_javadoc_escapes_the_text(self, java_writer):
        java_writer.javadoc("Ends here */ or not")
        java_writer.close()

        assert " * Ends here * / or not" in java_writer.content

    def test_javadoc_disabled(self, make_writer):
        writer = make_writer("Book.java", javadoc=False)
        writer.println("public class Book {")
        writer.javadoc("Never shown")
        writer.println("}")
        writer.close()

        assert writer.content == "public class Book {\n\n}\n"


class TestBoilerplate:
    def test_header(self, make_writer):
        writer = make_writer("Book.java")
        writer.header("Column %s", "ID")
        writer.close()

        rule = "// " + "-" * 73
        assert writer.content == f"\n{rule}\n// Column ID\n{rule}\n"

    def test_overrides(self, make_writer):
        writer = make_writer("Book.java")
        writer.println("class Book {")
        writer.override()
        writer.override_if(False)
        writer.override_inherit_if(True)
        writer.override_inherit()
        writer.println("}")
        writer.close()

        assert writer.content == (
            "class Book {\n"
            "    @Override\n"
            "\n"
            "    @Override\n"
            "\n"
            "    @Override\n"
            "}\n"
        )

    def test_package_name_is_captured(self, make_writer):
        writer = make_writer("Book.java")
        assert writer.package_name is None

        writer.print_package_specification("com.acme")

        assert writer.package_name == "com.acme"
        assert writer.class_name == "Book"
        assert writer.dialect.name == "java"


class TestConfiguration:
    def test_windows_line_endings(self, make_writer):
        writer = make_writer("Book.java", config=WriterConfig(line_ending="\r\n"))
        write_book(writer)
        writer.close()

        assert writer.content.startswith(
            "package com.acme;\r\n\r\nimport java.util.List;\r\n\r\n"
        )
        assert "\n" not in writer.content.replace("\r\n", "")

    def test_carriage_return_line_endings(self, make_writer):
        writer = make_writer("Book.java", config=WriterConfig(line_ending="\r"))
        writer.print_package_specification("com.acme")
        writer.print_imports()
        writer.println(
            "class Book { %s a; %s b; }",
            writer.ref("com.acme.Author"),
            writer.ref("java.util.List"),
        )
        writer.close()

        assert writer.content == (
            "package com.acme;\r"
            "\r"
            "import java.util.List;\r"
            "\r"
            "class Book { Author a; List b; }\r"
        )
        assert writer.imports == ["java.util.List"]

    def test_package_in_body_wins(self, make_writer, caplog):
        writer = make_writer("Book.java")
        writer.println("package com.other;")
        writer.print_package_specification("com.acme")
        writer.print_imports()
        writer.println("class Book { %s a; }", writer.ref("com.other.Author"))

        with caplog.at_level("WARNING", logger="jvm_writer"):
            writer.close()

        assert "import com.other.Author;" not in writer.content
        assert "declares package com.other instead of com.acme" in caplog.text

    def test_indent_override(self, make_writer):
        writer = make_writer("Book.java", config=WriterConfig(indent="\t"))
        writer.println("class Book {")
        writer.println("int id;")
        writer.println("}")
        writer.close()

        assert writer.content == "class Book {\n\tint id;\n}\n"

    def test_encoding(self, make_writer, tmp_path):
        writer = make_writer("Book.java", encoding="latin-1")
        writer.println("// Bücher")
        writer.close()

        assert (tmp_path / "Book.java").read_bytes() == "// Bücher\n".encode("latin-1")

    def test_custom_import_order(self, tmp_path):
        class OrgFirstWriter(JavaWriter):
            def qualified_type_key(self):
                return lambda name: (not name.startswith("org."), name)

        writer = OrgFirstWriter(tmp_path / "Book.java")
        writer.ref("java.util.List")
        writer.ref("org.jooq.Field")

        assert writer.imports == ["org.jooq.Field", "java.util.List"]

    def test_unknown_extension(self, make_writer):
        with pytest.raises(WriterError):
            make_writer("Book.txt")

    def test_invalid_exclusion_pattern(self, make_writer):
        with pytest.raises(WriterError):
            make_writer("Book.java", fully_qualified_types="java.(")


class TestLifecycle:
    def test_views_are_read_only_copies(self, java_writer):
        java_writer.ref("java.util.List")
        java_writer.bindings["List"] = "com.other.List"
        java_writer.qualified_types.append("com.other.List")

        assert java_writer.bindings == {"List": "java.util.List"}
        assert java_writer.qualified_types == ["java.util.List"]

    def test_ref_after_close_fails(self, java_writer):
        java_writer.println("class Book {}")
        java_writer.close()

        with pytest.raises(WriterError):
            java_writer.ref("java.util.List")

        assert java_writer.imports == []

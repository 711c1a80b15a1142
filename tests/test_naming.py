import pytest

from pg_typegen.codegen.core.config import GeneratorConfig
from pg_typegen.codegen.core.naming import NameSanitizer, NamingCase, split_words
from pg_typegen.codegen.languages.typescript.naming import (
    is_reserved,
    qualify_table_name,
    safe_symbol_name,
    transform_column_name,
    transform_enum_name,
    transform_type_name,
)


def test_safe_symbol_name_escapes_reserved_words():
    assert safe_symbol_name("package") == "package_"
    assert safe_symbol_name("tableName") == "tableName"


@pytest.mark.parametrize("name", ["string", "number", "package", "public"])
def test_default_reserved_words(name):
    assert is_reserved(name)
    assert safe_symbol_name(name) == name + "_"


def test_reserved_words_are_configurable():
    config = GeneratorConfig(reserved_words={"delete"}, reserved_suffix="Table")

    assert safe_symbol_name("delete", config) == "deleteTable"
    assert safe_symbol_name("package", config) == "package"


@pytest.mark.parametrize(
    "name, words",
    [
        ("table_name", ["table", "name"]),
        ("tableName", ["table", "name"]),
        ("kebab-case-name", ["kebab", "case", "name"]),
        ("HTTPServer", ["http", "server"]),
        ("enum1", ["enum1"]),
        ("package_", ["package"]),
        ("__", []),
    ],
)
def test_split_words(name, words):
    assert split_words(name) == words


def test_column_names_unchanged_without_camel_case(config):
    assert transform_column_name("user_id", config) == "user_id"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("user_id", "userId"),
        ("created-at", "createdAt"),
        ("id", "id"),
        ("alreadyCamel", "alreadyCamel"),
    ],
)
def test_column_names_camel_cased(name, expected):
    assert transform_column_name(name, GeneratorConfig(camel_case=True)) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("table_name", "TableName"),
        ("tableName", "TableName"),
        ("testschemaname_table_name", "TestschemanameTableName"),
        ("enum1", "Enum1"),
        ("package", "Package"),
    ],
)
def test_type_names_are_pascal_case(config, name, expected):
    assert transform_type_name(name, config) == expected


def test_type_names_ignore_camel_case_option():
    assert transform_type_name("user_accounts", GeneratorConfig(camel_case=True)) == "UserAccounts"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("companies", "Company"),
        ("user_accounts", "UserAccount"),
        ("users", "User"),
        ("user", "User"),
        ("addresses", "Address"),
        ("user_statuses", "UserStatus"),
    ],
)
def test_type_names_singularized(name, expected):
    assert transform_type_name(name, GeneratorConfig(singularize=True)) == expected


@pytest.mark.parametrize(
    "name",
    ["process", "address", "analysis", "class", "glass", "bus", "status", "user_access"],
)
def test_singular_table_names_stay_singular(name):
    expected = transform_type_name(name, GeneratorConfig())

    assert transform_type_name(name, GeneratorConfig(singularize=True)) == expected


def test_enum_names_keep_database_spelling(config):
    assert transform_enum_name("enum1", config) == "enum1"
    assert transform_enum_name("user_mood", config) == "user_mood"
    assert transform_enum_name("statuses", GeneratorConfig(singularize=True)) == "statuses"


def test_enum_names_pascal_cased_with_camel_case():
    config = GeneratorConfig(camel_case=True, singularize=True)

    assert transform_enum_name("user_moods", config) == "UserMoods"


def test_qualify_table_name(config):
    assert qualify_table_name("table_name", "testschemaname", config) == (
        "table_name",
        "table_name",
    )

    prefixed = GeneratorConfig(prefix_with_schema_names=True)
    assert qualify_table_name("table_name", "testschemaname", prefixed) == (
        "testschemaname.table_name",
        "testschemaname_table_name",
    )


def test_convert_case():
    sanitizer = NameSanitizer()

    assert sanitizer.convert_case("user_id", NamingCase.CAMEL_CASE) == "userId"
    assert sanitizer.convert_case("user_id", NamingCase.PASCAL_CASE) == "UserId"
    assert sanitizer.convert_case("user_id", NamingCase.ORIGINAL) == "user_id"

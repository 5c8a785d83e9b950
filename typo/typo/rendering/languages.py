"""Keyword and type-name tables for the code highlighter.

Each supported language maps to a static keyword table and a type-word
table. Language names are matched case-insensitively through an alias
table; unknown names use the generic tables.
"""

from enum import Enum


class Language(Enum):
    """Languages with their own highlighting tables."""
    SWIFT = "swift"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    MARKUP = "markup"
    CSS = "css"
    JSON = "json"
    RUST = "rust"
    GO = "go"
    JVM = "jvm"
    SHELL = "shell"
    GENERIC = "generic"


LANGUAGE_ALIASES: dict[str, Language] = {
    "swift": Language.SWIFT,
    "javascript": Language.JAVASCRIPT,
    "js": Language.JAVASCRIPT,
    "typescript": Language.JAVASCRIPT,
    "ts": Language.JAVASCRIPT,
    "jsx": Language.JAVASCRIPT,
    "tsx": Language.JAVASCRIPT,
    "python": Language.PYTHON,
    "py": Language.PYTHON,
    "html": Language.MARKUP,
    "xml": Language.MARKUP,
    "css": Language.CSS,
    "scss": Language.CSS,
    "sass": Language.CSS,
    "json": Language.JSON,
    "rust": Language.RUST,
    "rs": Language.RUST,
    "go": Language.GO,
    "java": Language.JVM,
    "kotlin": Language.JVM,
    "kt": Language.JVM,
    "bash": Language.SHELL,
    "sh": Language.SHELL,
    "shell": Language.SHELL,
    "zsh": Language.SHELL,
}


KEYWORDS: dict[Language, frozenset[str]] = {
    Language.SWIFT: frozenset({
        "import", "func", "var", "let", "if", "else", "for", "while", "return",
        "class", "struct", "enum", "protocol", "extension", "guard", "switch",
        "case", "default", "break", "continue", "throw", "throws", "try", "catch",
        "do", "in", "self", "Self", "true", "false", "nil", "private", "public",
        "internal", "fileprivate", "open", "static", "override", "init", "deinit",
        "where", "as", "is", "async", "await", "some", "any", "typealias",
        "associatedtype", "weak", "unowned", "lazy", "mutating", "nonmutating",
        "convenience", "required", "final", "inout", "defer", "repeat",
    }),
    Language.JAVASCRIPT: frozenset({
        "const", "let", "var", "function", "return", "if", "else", "for", "while",
        "do", "switch", "case", "default", "break", "continue", "class", "extends",
        "import", "export", "from", "async", "await", "try", "catch", "throw",
        "new", "this", "super", "typeof", "instanceof", "in", "of", "true",
        "false", "null", "undefined", "yield", "delete", "void", "interface",
        "type", "enum", "implements", "abstract", "readonly", "private", "public",
        "protected", "static", "constructor",
    }),
    Language.PYTHON: frozenset({
        "def", "class", "if", "elif", "else", "for", "while", "return", "import",
        "from", "as", "try", "except", "finally", "raise", "with", "yield",
        "lambda", "pass", "break", "continue", "and", "or", "not", "in", "is",
        "True", "False", "None", "self", "async", "await", "global", "nonlocal",
        "del", "assert",
    }),
    Language.MARKUP: frozenset(),
    Language.CSS: frozenset({
        "important", "inherit", "initial", "unset", "none", "auto", "block",
        "inline", "flex", "grid", "absolute", "relative", "fixed", "sticky",
    }),
    Language.JSON: frozenset({"true", "false", "null"}),
    Language.RUST: frozenset({
        "fn", "let", "mut", "if", "else", "for", "while", "loop", "return",
        "match", "struct", "enum", "impl", "trait", "use", "mod", "pub", "crate",
        "self", "super", "as", "in", "ref", "move", "async", "await", "true",
        "false", "where", "type", "const", "static", "unsafe", "extern",
    }),
    Language.GO: frozenset({
        "func", "var", "const", "if", "else", "for", "range", "return", "switch",
        "case", "default", "break", "continue", "type", "struct", "interface",
        "map", "chan", "go", "defer", "select", "package", "import", "true",
        "false", "nil",
    }),
    Language.JVM: frozenset({
        "class", "interface", "extends", "implements", "public", "private",
        "protected", "static", "final", "abstract", "void", "int", "long",
        "double", "float", "boolean", "char", "byte", "short", "new", "return",
        "if", "else", "for", "while", "do", "switch", "case", "default", "break",
        "continue", "try", "catch", "finally", "throw", "throws", "import",
        "package", "this", "super", "true", "false", "null", "val", "var", "fun",
        "when", "object", "companion", "data", "sealed", "override", "open",
        "lateinit", "suspend",
    }),
    Language.SHELL: frozenset({
        "if", "then", "else", "elif", "fi", "for", "while", "do", "done", "case",
        "esac", "function", "return", "exit", "echo", "export", "source", "local",
        "readonly", "in", "true", "false",
    }),
    Language.GENERIC: frozenset({
        "if", "else", "for", "while", "return", "function", "class", "import",
        "export", "var", "let", "const", "true", "false", "null", "nil", "self",
        "this", "new", "try", "catch", "throw", "switch", "case", "default",
        "break", "continue", "do", "in", "of", "async", "await", "public",
        "private", "static", "void", "int", "string", "bool", "float", "double",
    }),
}


GENERIC_TYPE_WORDS: frozenset[str] = frozenset({
    "String", "Int", "Integer", "Float", "Double", "Boolean", "Bool", "Array",
    "List", "Map", "Set", "Object", "Error", "Exception", "void", "null",
})

TYPE_WORDS: dict[Language, frozenset[str]] = {
    Language.SWIFT: frozenset({
        "String", "Int", "Double", "Float", "Bool", "Array", "Dictionary", "Set",
        "Optional", "Any", "AnyObject", "Void", "Never", "Error", "Codable",
        "Hashable", "Equatable", "Comparable", "Identifiable", "ObservableObject",
        "Published", "State", "Binding", "View", "Color", "Text", "Image",
        "Button", "VStack", "HStack", "ZStack", "List", "ForEach",
        "NavigationView", "ScrollView", "CGFloat", "CGPoint", "CGSize", "CGRect",
        "NSFont", "NSColor", "URL", "Data", "Date", "Result", "AttributedString",
    }),
    Language.JAVASCRIPT: frozenset({
        "String", "Number", "Boolean", "Object", "Array", "Map", "Set", "Promise",
        "Date", "Error", "RegExp", "Symbol", "BigInt", "Function", "Proxy",
        "Reflect", "JSON", "Math", "console", "document", "window",
        "HTMLElement", "React", "Component",
    }),
    Language.PYTHON: frozenset({
        "str", "int", "float", "bool", "list", "dict", "tuple", "set", "bytes",
        "type", "object", "Exception", "print", "len", "range", "enumerate",
        "zip", "map", "filter",
    }),
}


def resolve_language(name: str) -> Language:
    """Resolve a fence language tag to a Language.

    Args:
        name: Free-form tag such as "py", "TypeScript" or ""

    Returns:
        The matching Language, or Language.GENERIC when unrecognised
    """
    return LANGUAGE_ALIASES.get(name.strip().lower(), Language.GENERIC)


def keywords_for(language: Language) -> frozenset[str]:
    """Get the keyword table for a language."""
    return KEYWORDS[language]


def type_words_for(language: Language) -> frozenset[str]:
    """Get the type-word table for a language."""
    return TYPE_WORDS.get(language, GENERIC_TYPE_WORDS)

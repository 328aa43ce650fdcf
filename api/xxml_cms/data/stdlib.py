"""XXML standard library reference: the Core, Collections and System modules."""

from xxml_cms.schemas.docs import ClassData, ExampleData, MethodData, ModuleData


def _methods(*rows: tuple[str, str, str, str, str]) -> list[MethodData]:
    """Rows are (name, category, params, returns, description)."""
    return [
        MethodData(name=name, category=category, params=params, returns=returns, description=desc)
        for name, category, params, returns, desc in rows
    ]


INTEGER_EXAMPLE = """Instantiate Integer^ As <x> = Integer::Constructor(42);
Instantiate Integer^ As <y> = Integer::Constructor(10);

Instantiate Integer^ As <sum> = x.add(y);
Run System::Console::printLine(sum.toString());  // 52

If (x.greaterThan(y).toBool())
{
    Run System::Console::printLine(String::Constructor("x is greater"));
}"""

CORE = ModuleData(
    name="Core",
    slug="core",
    description="The Core module provides fundamental types that form the foundation of XXML programming.",
    import_path="#import Language::Core;",
    classes=[
        ClassData(
            name="Integer",
            slug="integer",
            description="64-bit signed integer type with full arithmetic and comparison operations.",
            methods=_methods(
                ("Constructor", "Constructors", "", "Integer", "Create default integer (0)"),
                ("Constructor", "Constructors", "value: Integer", "Integer^", "Create from literal value"),
                ("add", "Arithmetic", "other: Integer&", "Integer^", "Addition"),
                ("subtract", "Arithmetic", "other: Integer&", "Integer^", "Subtraction"),
                ("multiply", "Arithmetic", "other: Integer&", "Integer^", "Multiplication"),
                ("divide", "Arithmetic", "other: Integer&", "Integer^", "Integer division"),
                ("modulo", "Arithmetic", "other: Integer&", "Integer^", "Remainder"),
                ("negate", "Arithmetic", "", "Integer^", "Negation"),
                ("equals", "Comparison", "other: Integer&", "Bool^", "Equality check"),
                ("lessThan", "Comparison", "other: Integer&", "Bool^", "Less than"),
                ("greaterThan", "Comparison", "other: Integer&", "Bool^", "Greater than"),
                ("lessOrEqual", "Comparison", "other: Integer&", "Bool^", "Less or equal"),
                ("greaterOrEqual", "Comparison", "other: Integer&", "Bool^", "Greater or equal"),
                ("toString", "Conversion", "", "String^", "Convert to string"),
                ("toDouble", "Conversion", "", "Double^", "Convert to double"),
                ("abs", "Utility", "", "Integer^", "Absolute value"),
                ("hash", "Utility", "", "Integer^", "Hash code"),
            ),
            examples=[ExampleData(code=INTEGER_EXAMPLE)],
        ),
        ClassData(
            name="Double",
            slug="double",
            description="64-bit floating-point type for decimal arithmetic with full IEEE 754 support.",
            methods=_methods(
                ("Constructor", "Constructors", "", "Double", "Create default (0.0)"),
                ("Constructor", "Constructors", "value: Double", "Double^", "Create from literal"),
                ("add", "Arithmetic", "other: Double&", "Double^", "Addition"),
                ("subtract", "Arithmetic", "other: Double&", "Double^", "Subtraction"),
                ("multiply", "Arithmetic", "other: Double&", "Double^", "Multiplication"),
                ("divide", "Arithmetic", "other: Double&", "Double^", "Division"),
                ("negate", "Arithmetic", "", "Double^", "Negation"),
                ("equals", "Comparison", "other: Double&", "Bool^", "Equality"),
                ("lessThan", "Comparison", "other: Double&", "Bool^", "Less than"),
                ("greaterThan", "Comparison", "other: Double&", "Bool^", "Greater than"),
                ("toString", "Conversion", "", "String^", "Convert to string"),
                ("toInteger", "Conversion", "", "Integer^", "Truncate to integer"),
                ("floor", "Utility", "", "Double^", "Round down"),
                ("ceil", "Utility", "", "Double^", "Round up"),
                ("round", "Utility", "", "Double^", "Round to nearest"),
                ("abs", "Utility", "", "Double^", "Absolute value"),
            ),
        ),
        ClassData(
            name="Bool",
            slug="bool",
            description="Boolean type representing true/false values with logical operations.",
            methods=_methods(
                ("Constructor", "Constructors", "", "Bool", "Create default (false)"),
                ("Constructor", "Constructors", "value: Bool", "Bool^", "Create from literal"),
                ("and", "Logical", "other: Bool&", "Bool^", "Logical AND"),
                ("or", "Logical", "other: Bool&", "Bool^", "Logical OR"),
                ("not", "Logical", "", "Bool^", "Logical NOT"),
                ("equals", "Comparison", "other: Bool&", "Bool^", "Equality"),
                ("toBool", "Conversion", "", "bool", "Convert to native bool"),
                ("toString", "Conversion", "", "String^", '"true" or "false"'),
            ),
        ),
        ClassData(
            name="String",
            slug="string",
            description="Immutable UTF-8 string type with comprehensive text manipulation operations.",
            methods=_methods(
                ("Constructor", "Constructors", "", "String", "Create empty string"),
                ("Constructor", "Constructors", "value: String", "String^", "Create from literal"),
                ("length", "Properties", "", "Integer^", "Character count"),
                ("isEmpty", "Properties", "", "Bool^", "Check if empty"),
                ("append", "Operations", "other: String&", "String^", "Concatenate strings"),
                ("charAt", "Operations", "index: Integer&", "String^", "Get character at index"),
                ("substring", "Operations", "start: Integer&, length: Integer&", "String^", "Extract substring"),
                ("contains", "Search", "substr: String&", "Bool^", "Check if contains"),
                ("startsWith", "Search", "prefix: String&", "Bool^", "Check prefix"),
                ("endsWith", "Search", "suffix: String&", "Bool^", "Check suffix"),
                ("indexOf", "Search", "substr: String&", "Integer^", "Find first occurrence"),
                ("toUpperCase", "Transform", "", "String^", "Convert to uppercase"),
                ("toLowerCase", "Transform", "", "String^", "Convert to lowercase"),
                ("trim", "Transform", "", "String^", "Remove whitespace"),
                ("replace", "Transform", "old: String&, new: String&", "String^", "Replace occurrences"),
                ("split", "Transform", "delimiter: String&", "List<String>^", "Split into list"),
                ("equals", "Comparison", "other: String&", "Bool^", "Equality check"),
                ("compareTo", "Comparison", "other: String&", "Integer^", "Lexicographic compare"),
                ("hash", "Utility", "", "Integer^", "Hash code"),
            ),
        ),
        ClassData(
            name="None",
            slug="none",
            description="Unit type representing the absence of a value, used for void returns.",
            methods=_methods(
                ("Constructor", "Constructors", "", "None^", "Create None instance"),
                ("toString", "Methods", "", "String^", 'Returns "None"'),
            ),
        ),
    ],
)

COLLECTIONS = ModuleData(
    name="Collections",
    slug="collections",
    description="Generic collection types for storing and manipulating groups of elements.",
    import_path="#import Language::Collections;",
    classes=[
        ClassData(
            name="List<T>",
            slug="list-t",
            description="Dynamic array with automatic resizing and index-based access.",
            constraints="T: Any",
            methods=_methods(
                ("Constructor", "Constructors", "", "List<T>", "Create empty list"),
                ("size", "Properties", "", "Integer^", "Element count"),
                ("isEmpty", "Properties", "", "Bool^", "Check if empty"),
                ("add", "Modification", "element: T^", "None", "Add to end"),
                ("insert", "Modification", "index: Integer&, element: T^", "None", "Insert at index"),
                ("remove", "Modification", "index: Integer&", "T^", "Remove at index"),
                ("clear", "Modification", "", "None", "Remove all elements"),
                ("get", "Access", "index: Integer&", "T&", "Get by reference"),
                ("set", "Access", "index: Integer&, element: T^", "None", "Set at index"),
                ("first", "Access", "", "T&", "First element"),
                ("last", "Access", "", "T&", "Last element"),
                ("contains", "Search", "element: T&", "Bool^", "Check if contains"),
                ("indexOf", "Search", "element: T&", "Integer^", "Find index (-1 if not found)"),
            ),
        ),
        ClassData(
            name="Map<K, V>",
            slug="map-k-v",
            description="Hash-based key-value store with O(1) average access time.",
            constraints="K: Hashable, Equatable",
            methods=_methods(
                ("Constructor", "Constructors", "", "Map<K,V>", "Create empty map"),
                ("size", "Properties", "", "Integer^", "Key-value pair count"),
                ("isEmpty", "Properties", "", "Bool^", "Check if empty"),
                ("put", "Modification", "key: K^, value: V^", "None", "Insert or update"),
                ("remove", "Modification", "key: K&", "V^", "Remove by key"),
                ("clear", "Modification", "", "None", "Remove all entries"),
                ("get", "Access", "key: K&", "V&", "Get value by key"),
                ("containsKey", "Search", "key: K&", "Bool^", "Check key exists"),
                ("containsValue", "Search", "value: V&", "Bool^", "Check value exists"),
                ("keys", "Iteration", "", "List<K>^", "Get all keys"),
                ("values", "Iteration", "", "List<V>^", "Get all values"),
            ),
        ),
        ClassData(
            name="Set<T>",
            slug="set-t",
            description="Hash-based collection of unique elements with fast membership testing.",
            constraints="T: Hashable, Equatable",
            methods=_methods(
                ("Constructor", "Constructors", "", "Set<T>", "Create empty set"),
                ("size", "Properties", "", "Integer^", "Element count"),
                ("isEmpty", "Properties", "", "Bool^", "Check if empty"),
                ("add", "Modification", "element: T^", "Bool^", "Add element (returns true if added)"),
                ("remove", "Modification", "element: T&", "Bool^", "Remove element"),
                ("clear", "Modification", "", "None", "Remove all elements"),
                ("contains", "Search", "element: T&", "Bool^", "Check membership"),
                ("union", "Set Operations", "other: Set<T>&", "Set<T>^", "Union of sets"),
                ("intersection", "Set Operations", "other: Set<T>&", "Set<T>^", "Intersection"),
                ("difference", "Set Operations", "other: Set<T>&", "Set<T>^", "Difference"),
                ("toList", "Conversion", "", "List<T>^", "Convert to list"),
            ),
        ),
        ClassData(
            name="Queue<T>",
            slug="queue-t",
            description="FIFO (first-in, first-out) queue for ordered processing.",
            constraints="T: Any",
            methods=_methods(
                ("Constructor", "Constructors", "", "Queue<T>", "Create empty queue"),
                ("size", "Properties", "", "Integer^", "Element count"),
                ("isEmpty", "Properties", "", "Bool^", "Check if empty"),
                ("enqueue", "Operations", "element: T^", "None", "Add to back"),
                ("dequeue", "Operations", "", "T^", "Remove from front"),
                ("peek", "Operations", "", "T&", "View front element"),
                ("clear", "Operations", "", "None", "Remove all elements"),
            ),
        ),
        ClassData(
            name="Stack<T>",
            slug="stack-t",
            description="LIFO (last-in, first-out) stack for nested operations.",
            constraints="T: Any",
            methods=_methods(
                ("Constructor", "Constructors", "", "Stack<T>", "Create empty stack"),
                ("size", "Properties", "", "Integer^", "Element count"),
                ("isEmpty", "Properties", "", "Bool^", "Check if empty"),
                ("push", "Operations", "element: T^", "None", "Push to top"),
                ("pop", "Operations", "", "T^", "Pop from top"),
                ("peek", "Operations", "", "T&", "View top element"),
                ("clear", "Operations", "", "None", "Remove all elements"),
            ),
        ),
    ],
)

SYSTEM = ModuleData(
    name="System",
    slug="system",
    description="System-level operations including console I/O, file operations, and environment access.",
    import_path="#import Language::System;",
    classes=[
        ClassData(
            name="Console",
            slug="console",
            description="Standard input/output operations for terminal interaction.",
            methods=_methods(
                ("print", "Output", "message: String&", "None", "Print without newline"),
                ("printLine", "Output", "message: String&", "None", "Print with newline"),
                ("readLine", "Input", "", "String^", "Read line from stdin"),
                ("readInt", "Input", "", "Integer^", "Read and parse integer"),
                ("readDouble", "Input", "", "Double^", "Read and parse double"),
                ("clear", "Control", "", "None", "Clear console screen"),
            ),
        ),
        ClassData(
            name="File",
            slug="file",
            description="File system operations for reading and writing files.",
            methods=_methods(
                ("Constructor", "Constructors", "path: String^", "File^", "Create file handle"),
                ("exists", "Properties", "", "Bool^", "Check if file exists"),
                ("isDirectory", "Properties", "", "Bool^", "Check if directory"),
                ("size", "Properties", "", "Integer^", "Get file size in bytes"),
                ("read", "Operations", "", "String^", "Read entire file"),
                ("write", "Operations", "content: String&", "Bool^", "Write/overwrite file"),
                ("append", "Operations", "content: String&", "Bool^", "Append to file"),
                ("delete", "Operations", "", "Bool^", "Delete file"),
                ("copy", "Operations", "destination: String&", "Bool^", "Copy file"),
                ("move", "Operations", "destination: String&", "Bool^", "Move/rename file"),
                ("readLines", "Operations", "", "List<String>^", "Read as lines"),
                ("listDirectory", "Directory", "", "List<String>^", "List directory contents (static)"),
                ("createDirectory", "Directory", "", "Bool^", "Create directory (static)"),
            ),
        ),
        ClassData(
            name="Environment",
            slug="environment",
            description="Access to environment variables and system properties.",
            methods=_methods(
                ("get", "Variables", "name: String&", "String^", "Get environment variable"),
                ("set", "Variables", "name: String&, value: String&", "Bool^", "Set environment variable"),
                ("getAll", "Variables", "", "Map<String, String>^", "Get all variables"),
                ("getCurrentDirectory", "Paths", "", "String^", "Current working directory"),
                ("getHomeDirectory", "Paths", "", "String^", "User home directory"),
                ("getTempDirectory", "Paths", "", "String^", "System temp directory"),
                ("getOsName", "System", "", "String^", "Operating system name"),
                ("getOsVersion", "System", "", "String^", "OS version"),
                ("getProcessorCount", "System", "", "Integer^", "CPU core count"),
            ),
        ),
    ],
)

STDLIB_MODULES: list[ModuleData] = [CORE, COLLECTIONS, SYSTEM]

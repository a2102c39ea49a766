# python
"""
Registry declaration tests.

Scope
- Lifecycle: init() resets the tables, records argv and creates the root command.
- Declarations: returned handles, defaults, `command=` routing by slot or Command.
- Validation: capacities, duplicate names, missing names, list-last rule, enum options,
  and the SchemaWarning for a required positional after an optional one.
- Lookups: name_of() and free_list().
- Process-wide API: module-level functions delegate to the default registry.

Conventions
- Test method names follow CamelCase per project convention.
- Every test builds its own Registry unless it exercises the module-level API.
"""

from __future__ import annotations

import unittest
import warnings
from unittest import TestCase

import argslot
from argslot import (
    Registry,
    Required,
    ValueType,
    BoolSlot,
    UintSlot,
    StrSlot,
    EnumSlot,
    ArgList,
    SchemaError,
    CapacityError,
    DuplicateNameError,
    SchemaWarning,
)


def make(argv=("prog",), **knobs):
    registry = Registry(**knobs)
    registry.init(list(argv))
    return registry


class TestLifecycle(TestCase):
    def testInitCreatesRootFromProgramName(self):
        registry = Registry()
        root = registry.init(["prog", "a"], desc="demo")
        self.assertEqual(root.name, "prog")
        self.assertEqual(root.desc, "demo")
        self.assertIs(registry.root, root)
        self.assertIs(registry.context, root)
        self.assertEqual(registry.rest, ("prog", "a"))

    def testInitAttachesHelpFlag(self):
        registry = make()
        self.assertEqual(len(registry.flags), 1)
        self.assertEqual(registry.flags[0].spellings, ("-h", "--help"))
        self.assertIs(registry.root.help_flag, registry.flags[0])

    def testInitWithoutHelp(self):
        registry = Registry()
        root = registry.init(["prog"], help=False)
        self.assertEqual(registry.flags, ())
        self.assertIsNone(root.help_flag)

    def testInitRejectsEmptyArgv(self):
        with self.assertRaises(SchemaError):
            Registry().init([])

    def testEmptyProgramNameIsAccepted(self):
        registry = Registry()
        root = registry.init(["", "7"])
        identifier = registry.pos_uint("id", required=True)
        self.assertEqual(root.name, "")
        self.assertTrue(registry.parse_args())
        self.assertEqual(identifier.value, 7)

    def testEmptySubCommandNameRejected(self):
        with self.assertRaises(SchemaError):
            make().command("")

    def testInitRejectsNonStringTokens(self):
        with self.assertRaises(TypeError):
            Registry().init(["prog", 1])

    def testInitResetsTables(self):
        registry = make()
        registry.flag_bool("v", "verbose")
        registry.pos_str("name")
        registry.init(["again"])
        self.assertEqual(registry.root.name, "again")
        self.assertEqual(len(registry.flags), 1)
        self.assertEqual(registry.positionals, ())
        self.assertIsNone(registry.error)

    def testDeclaringBeforeInitFails(self):
        with self.assertRaises(SchemaError):
            Registry().flag_bool("v")
        with self.assertRaises(SchemaError):
            Registry().parse_args()

    def testKnobsMustBePositive(self):
        with self.assertRaises(ValueError):
            Registry(print_width=0)
        with self.assertRaises(TypeError):
            Registry(flag_capacity="8")


class TestDeclarations(TestCase):
    def testHandlesCarryDefaults(self):
        registry = make()
        self.assertIsInstance(registry.flag_bool("v", "verbose"), BoolSlot)
        self.assertEqual(registry.flag_uint("r", "retries", 3).value, 3)
        self.assertEqual(registry.flag_str("o", "output", "default.txt").value, "default.txt")
        self.assertEqual(registry.flag_enum("m", "mode", ("a", "b"), 1).choice, "b")
        self.assertIsInstance(registry.flag_list("L"), ArgList)
        self.assertIsInstance(registry.pos_uint("id"), UintSlot)
        self.assertIsInstance(registry.pos_str("name"), StrSlot)
        self.assertIsInstance(registry.pos_enum("kind", ("x", "y")), EnumSlot)
        self.assertIsInstance(registry.pos_list("files"), ArgList)

    def testMetaVarOnEveryFlagType(self):
        registry = make()
        registry.flag_bool("q", meta_var="QUIET")
        registry.flag_enum("m", "mode", ("fast", "slow"), 1, meta_var="MODE")
        self.assertEqual([flag.meta_var for flag in registry.flags[1:]], ["QUIET", "MODE"])

    def testListCapacityKnobReachesSlots(self):
        registry = make(list_capacity=2)
        items = registry.flag_list("L")
        items.append("a")
        self.assertEqual(items.capacity, 2)

    def testRecordsKeepDeclarationOrder(self):
        registry = make()
        registry.pos_uint("id", required=True)
        registry.pos_str("name")
        self.assertEqual([positional.name for positional in registry.positionals], ["id", "name"])
        self.assertIs(registry.positionals[0].required, Required.REQUIRED)
        self.assertIs(registry.positionals[1].type, ValueType.STR)

    def testEnumOptionsAcceptGenerators(self):
        registry = make()
        slot = registry.pos_enum("mode", (option for option in ("fast", "slow")))
        self.assertEqual(registry.positionals[0].options, ("fast", "slow"))
        self.assertEqual(slot.options, ("fast", "slow"))

    def testCommandHandleRoutesDeclarations(self):
        registry = make()
        build = registry.command("build", desc="build the project")
        verbose = registry.flag_bool("v", command=build)
        flag = registry.flags[-1]
        self.assertEqual(flag.command.name, "build")
        self.assertIs(flag.slot, verbose)
        self.assertEqual(registry.root.command_count, 1)
        self.assertEqual(registry.commands[1].flag_count, 2)

    def testCommandObjectRoutesDeclarations(self):
        registry = make()
        registry.command("build")
        build = registry.commands[1]
        registry.pos_str("file", command=build)
        self.assertIs(registry.positionals[0].command, build)

    def testNestedCommandsHavePaths(self):
        registry = make()
        remote = registry.command("remote")
        registry.command("add", command=remote)
        self.assertEqual(registry.commands[2].route, "prog remote add")
        self.assertIs(registry.commands[2].root, registry.root)

    def testForeignCommandHandleRejected(self):
        registry = make()
        with self.assertRaises(SchemaError):
            registry.flag_bool("v", command=BoolSlot())
        with self.assertRaises(TypeError):
            registry.flag_bool("v", command="build")

    def testRequiredAcceptsBooleans(self):
        registry = make()
        registry.pos_uint("id", required=True)
        self.assertIs(registry.positionals[0].required, Required.REQUIRED)


class TestValidation(TestCase):
    def testFlagCapacity(self):
        registry = make(flag_capacity=2)
        registry.flag_bool("a")
        with self.assertRaises(CapacityError):
            registry.flag_bool("b")

    def testPositionalCapacity(self):
        registry = make(positional_capacity=1)
        registry.pos_str("a")
        with self.assertRaises(CapacityError):
            registry.pos_str("b")

    def testCommandCapacity(self):
        registry = make(command_capacity=1)
        with self.assertRaises(CapacityError):
            registry.command("build")

    def testCapacityErrorIsSchemaError(self):
        self.assertTrue(issubclass(CapacityError, SchemaError))
        self.assertTrue(issubclass(SchemaError, ValueError))

    def testDuplicateShortName(self):
        registry = make()
        registry.flag_bool("v", "verbose")
        with self.assertRaises(DuplicateNameError):
            registry.flag_bool("v", "version")

    def testDuplicateLongName(self):
        registry = make()
        registry.flag_bool("v", "verbose")
        with self.assertRaises(DuplicateNameError):
            registry.flag_bool("V", "verbose")

    def testHelpNamesAreTaken(self):
        with self.assertRaises(DuplicateNameError):
            make().flag_bool("h", "host")

    def testShortNamesMayRepeatAcrossCommands(self):
        registry = make()
        build = registry.command("build")
        registry.flag_bool("v", "verbose")
        registry.flag_bool("v", "verbose", command=build)
        self.assertEqual(len(registry.flags), 4)

    def testDuplicatePositional(self):
        registry = make()
        registry.pos_str("name")
        with self.assertRaises(DuplicateNameError):
            registry.pos_uint("name")

    def testDuplicateCommand(self):
        registry = make()
        registry.command("build")
        with self.assertRaises(DuplicateNameError):
            registry.command("build")

    def testFlagNeedsAName(self):
        registry = make()
        with self.assertRaises(SchemaError):
            registry.flag_bool(None)
        with self.assertRaises(SchemaError):
            registry.flag_bool("", "")

    def testLongOnlyFlag(self):
        registry = make()
        registry.flag_bool(None, "dry-run")
        self.assertEqual(registry.flags[-1].spellings, ("--dry-run",))

    def testDashedNamesRejected(self):
        registry = make()
        with self.assertRaises(SchemaError):
            registry.flag_bool("-v")
        with self.assertRaises(SchemaError):
            registry.pos_str("--name")

    def testPositionalAfterListRejected(self):
        registry = make()
        registry.pos_list("files")
        with self.assertRaises(SchemaError):
            registry.pos_str("extra")

    def testEnumNeedsOptions(self):
        registry = make()
        with self.assertRaises(SchemaError):
            registry.pos_enum("mode", ())
        with self.assertRaises(TypeError):
            registry.flag_enum("m", "mode", "fast")

    def testRequiredAfterOptionalWarns(self):
        registry = make()
        registry.pos_str("name")
        with self.assertWarns(SchemaWarning):
            registry.pos_uint("id", required=True)

    def testRequiredFirstDoesNotWarn(self):
        registry = make()
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            registry.pos_uint("id", required=True)
            registry.pos_str("name")


class TestLookups(TestCase):
    def testNameOfPrefersLongName(self):
        registry = make()
        verbose = registry.flag_bool("v", "verbose")
        linker = registry.flag_list("L")
        identifier = registry.pos_uint("id")
        self.assertEqual(registry.name_of(verbose), "verbose")
        self.assertEqual(registry.name_of(linker), "L")
        self.assertEqual(registry.name_of(identifier), "id")

    def testNameOfUnknownHandle(self):
        self.assertIsNone(make().name_of(BoolSlot()))

    def testFreeList(self):
        registry = make()
        items = registry.flag_list("L")
        items.append("m")
        registry.free_list(items)
        self.assertEqual(items.capacity, 0)
        self.assertEqual(len(items), 0)

    def testFreeListRejectsOtherSlots(self):
        with self.assertRaises(TypeError):
            Registry.free_list(BoolSlot())


class TestDefaultRegistry(TestCase):
    def testModuleFunctionsDelegate(self):
        root = argslot.init(["prog", "-v", "7"], desc="demo")
        verbose = argslot.flag_bool("v", "verbose")
        identifier = argslot.pos_uint("id", required=True)
        self.assertTrue(argslot.parse_args())
        self.assertTrue(verbose.value)
        self.assertEqual(identifier.value, 7)
        self.assertIs(argslot.default_registry().root, root)
        self.assertEqual(argslot.name_of(identifier), "id")
        self.assertEqual(argslot.format_error(), "No errors parsing arguments\n")

    def testInitReplacesDefaultRegistry(self):
        argslot.init(["first"])
        first = argslot.default_registry()
        argslot.init(["second"], print_width=30)
        self.assertIsNot(argslot.default_registry(), first)
        self.assertEqual(argslot.default_registry().print_width, 30)


if __name__ == "__main__":
    unittest.main()

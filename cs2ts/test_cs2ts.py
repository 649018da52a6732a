#!/usr/bin/env python3
"""
Unit tests for the cs2ts generator.

Run with: python3 -m pytest cs2ts/test_cs2ts.py
   or: python3 -m unittest cs2ts.test_cs2ts
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from cs2ts.codegen import (
    CodeGenerationContext,
    DocumentationGenerator,
    ExpressionGenerator,
    ImportGenerator,
    ImportUsage,
    TranspilerDiagnostics,
    TypeConverter,
    TypeScriptCodeGenerator,
    UNSUPPORTED,
    extract_sections,
    resolve_relative_path,
    to_member_case,
)
from cs2ts.cs2ts import DEFAULT_BANNER, DeclarationToTypeScriptTranspiler, main
from cs2ts.declarations import (
    ArrayLiteral,
    ArrayType,
    BinaryExpression,
    CapabilityTag,
    ConditionalExpression,
    ConstantReference,
    Declaration,
    DeclarationKind,
    EnumMemberReference,
    FunctionType,
    GenericType,
    InvocationExpression,
    Literal,
    Member,
    NamedType,
    NegateExpression,
    NullableType,
    ObjectCreation,
    OpaqueExpression,
    ParenthesizedExpression,
    PrimitiveType,
    PropertyAssignment,
    SpreadElement,
    declaration_from_dict,
    declarations_from_json,
    type_from_dict,
)
from cs2ts.type_system import PRIMITIVE_TYPE_MAP, TypeRegistry


def _registry(declarations, diagnostics=None):
    registry = TypeRegistry(diagnostics)
    registry.discover_from_declarations(declarations)
    registry.seal()
    return registry


def _generate(declarations, known=(), diagnostics=None):
    """Generate the file holding declarations, with known declared elsewhere."""
    registry = _registry(list(declarations) + list(known), diagnostics)
    generator = TypeScriptCodeGenerator(
        registry,
        current_file_path=declarations[0].source_path,
        diagnostics=diagnostics,
    )
    return generator.generate(declarations)


def _enum(name, *members, source_path='Models/Enums.cs'):
    return Declaration(name, DeclarationKind.ENUM, source_path, members=list(members))


class TestNameCasing(unittest.TestCase):
    """Test member name conversion to lowerCamel form."""

    def test_single_capital(self):
        self.assertEqual(to_member_case('Name'), 'name')
        self.assertEqual(to_member_case('Id'), 'id')
        self.assertEqual(to_member_case('FirstName'), 'firstName')

    def test_leading_acronym_keeps_word_boundary(self):
        self.assertEqual(to_member_case('URLPath'), 'urlPath')
        self.assertEqual(to_member_case('IOStream'), 'ioStream')
        self.assertEqual(to_member_case('HTMLElementId'), 'htmlElementId')

    def test_acronym_only(self):
        self.assertEqual(to_member_case('ID'), 'id')
        self.assertEqual(to_member_case('URL'), 'url')

    def test_already_lower(self):
        self.assertEqual(to_member_case('name'), 'name')
        self.assertEqual(to_member_case('_count'), '_count')
        self.assertEqual(to_member_case(''), '')


class TestTypeConverter(unittest.TestCase):
    """Test the type reference to TypeScript mapping."""

    def setUp(self):
        self.ctx = CodeGenerationContext.from_registry(None, current_file_path='Models/User.cs')
        self.converter = TypeConverter(self.ctx)

    def test_every_primitive_is_stable(self):
        """Each primitive always maps to the same TypeScript type."""
        for name, ts_type in PRIMITIVE_TYPE_MAP.items():
            self.assertEqual(self.converter.to_ts(PrimitiveType(name)), ts_type)
            self.assertEqual(self.converter.to_ts(PrimitiveType(name)), ts_type)
        self.assertEqual(self.converter.to_ts(PrimitiveType('bool')), 'boolean')
        self.assertEqual(self.ctx.imports, {})

    def test_nullable_wraps_outer_container(self):
        ref = NullableType(GenericType('List', [PrimitiveType('int')]))
        self.assertEqual(self.converter.to_ts(ref), 'number[] | null')

    def test_nullable_generic(self):
        ref = GenericType('Nullable', [PrimitiveType('int')])
        self.assertEqual(self.converter.to_ts(ref), 'number | null')

    def test_array_of_union_is_parenthesized(self):
        ref = GenericType('List', [NullableType(PrimitiveType('string'))])
        self.assertEqual(self.converter.to_ts(ref), '(string | null)[]')
        self.assertEqual(self.converter.to_ts(ArrayType(PrimitiveType('double'))), 'number[]')

    def test_array_of_function_is_parenthesized(self):
        ref = ArrayType(FunctionType([], PrimitiveType('int')))
        self.assertEqual(self.converter.to_ts(ref), '(() => number)[]')

    def test_array_parentheses_follow_element_shape(self):
        """Function types nested in generic arguments do not wrap the element."""
        nested = ArrayType(GenericType('Dictionary', [PrimitiveType('string'), NamedType('Action')]))
        self.assertEqual(self.converter.to_ts(nested), 'Partial<Record<string, () => void>>[]')
        delegates = GenericType('List', [GenericType('Action', [PrimitiveType('int')])])
        self.assertEqual(self.converter.to_ts(delegates), '((arg: number) => void)[]')

    def test_array_of_union_override_is_parenthesized(self):
        ctx = CodeGenerationContext.from_registry(None, primitive_overrides={'EntityId': 'string | number'})
        converter = TypeConverter(ctx)
        self.assertEqual(converter.to_ts(ArrayType(NamedType('EntityId'))), '(string | number)[]')

    def test_map_container(self):
        ref = GenericType('Dictionary', [PrimitiveType('string'), PrimitiveType('int')])
        self.assertEqual(self.converter.to_ts(ref), 'Partial<Record<string, number>>')

    def test_action_delegates(self):
        self.assertEqual(self.converter.to_ts(NamedType('Action')), '() => void')
        self.assertEqual(
            self.converter.to_ts(GenericType('Action', [PrimitiveType('int')])),
            '(arg: number) => void',
        )
        self.assertEqual(
            self.converter.to_ts(GenericType('Action', [PrimitiveType('int'), PrimitiveType('string')])),
            '(arg1: number, arg2: string) => void',
        )

    def test_func_delegates(self):
        self.assertEqual(
            self.converter.to_ts(GenericType('Func', [PrimitiveType('int')])),
            '() => number',
        )
        self.assertEqual(
            self.converter.to_ts(GenericType('Func', [PrimitiveType('int'), PrimitiveType('string'), PrimitiveType('bool')])),
            '(arg1: number, arg2: string) => boolean',
        )

    def test_delegate_arity_overflow_is_unknown(self):
        ref = GenericType('Func', [PrimitiveType('int')] * 4)
        self.assertEqual(self.converter.to_ts(ref), 'unknown')
        self.assertEqual([d.code for d in self.ctx.diagnostics.warnings], ['W003'])

    def test_unknown_primitive_is_unknown(self):
        self.assertEqual(self.converter.to_ts(PrimitiveType('Half')), 'unknown')
        self.assertEqual(self.ctx.diagnostics.warnings[0].code, 'W003')

    def test_named_type_registers_type_import(self):
        self.assertEqual(self.converter.to_ts(NamedType('Address')), 'Address')
        self.assertEqual(self.ctx.imports, {'Address': ImportUsage.TYPE})

    def test_qualified_name_has_no_import(self):
        self.assertEqual(
            self.converter.to_ts(NamedType('Status', 'System.Net')), 'System.Net.Status'
        )
        self.assertEqual(self.ctx.imports, {})

    def test_type_parameter_has_no_import(self):
        self.ctx.reset_for_declaration('Page', ['T'])
        ref = GenericType('List', [NamedType('T')])
        self.assertEqual(self.converter.to_ts(ref), 'T[]')
        self.assertEqual(self.ctx.imports, {})

    def test_other_generic_declaration(self):
        ref = GenericType('Page', [NamedType('User')])
        self.assertEqual(self.converter.to_ts(ref), 'Page<User>')
        self.assertEqual(set(self.ctx.imports), {'Page', 'User'})

    def test_render_node_capability_overrides_type(self):
        ts_type = self.converter.to_ts(PrimitiveType('object'), {CapabilityTag.RENDER_NODE})
        self.assertEqual(ts_type, 'ReactNode')
        self.assertEqual(self.ctx.external_modules, {'ReactNode': 'react'})
        self.assertTrue(self.ctx.is_type_only('ReactNode'))

    def test_dom_element_capability_has_no_import(self):
        ts_type = self.converter.to_ts(NamedType('object'), {CapabilityTag.DOM_ELEMENT})
        self.assertEqual(ts_type, 'HTMLElement')
        self.assertEqual(self.ctx.imports, {})

    def test_hinted_primitives_raise_hints(self):
        self.assertEqual(self.converter.to_ts(NullableType(PrimitiveType('TimeSpan'))), 'number | null')
        self.assertEqual(self.ctx.take_hints(), ['duration'])
        self.assertEqual(self.converter.to_ts(PrimitiveType('DateTimeOffset')), 'string')
        self.assertEqual(self.ctx.take_hints(), ['date-time-offset'])

    def test_primitive_overrides(self):
        ctx = CodeGenerationContext.from_registry(
            None, primitive_overrides={'Instant': 'string'}, hint_overrides={'Instant': 'date-time-offset'}
        )
        converter = TypeConverter(ctx)
        self.assertEqual(converter.to_ts(NamedType('Instant')), 'string')
        self.assertEqual(ctx.take_hints(), ['date-time-offset'])
        self.assertEqual(ctx.imports, {})


class TestImportResolution(unittest.TestCase):
    """Test relative import paths and import header generation."""

    def test_sibling_directory(self):
        self.assertEqual(resolve_relative_path('a/b/X.cs', 'a/c/Y.cs'), '../c/Y')

    def test_same_directory(self):
        self.assertEqual(resolve_relative_path('a/b/X.cs', 'a/b/Y.cs'), './Y')

    def test_subdirectory_and_parents(self):
        self.assertEqual(resolve_relative_path('Models/User.cs', 'Models/Enums/Role.ts'), './Enums/Role')
        self.assertEqual(resolve_relative_path('Models/Deep/User.cs', 'Role.cs'), '../../Role')
        self.assertEqual(resolve_relative_path('User.cs', 'Models/Role.cs'), './Models/Role')

    def test_case_insensitive_segments(self):
        self.assertEqual(resolve_relative_path('Models/User.cs', 'models/Role.cs'), './Role')

    def test_backslash_separators(self):
        self.assertEqual(resolve_relative_path('Models\\Orders\\Order.cs', 'Models\\User.cs'), '../User')

    def test_usage_flags_only_escalate(self):
        ctx = CodeGenerationContext()
        ctx.mark_import('Role', ImportUsage.VALUE)
        ctx.mark_import('Role', ImportUsage.TYPE)
        self.assertFalse(ctx.is_type_only('Role'))

    def test_header_is_sorted_and_typed(self):
        declarations = [
            Declaration('Zeta', DeclarationKind.STRUCTURED_TYPE, 'Models/Zeta.cs'),
            Declaration('Alpha', DeclarationKind.ENUM, 'Models/Alpha.cs'),
        ]
        ctx = CodeGenerationContext.from_registry(_registry(declarations), current_file_path='Models/User.cs')
        ctx.mark_import('Zeta')
        ctx.mark_import('Alpha', ImportUsage.VALUE)
        header = ImportGenerator(ctx).generate()
        self.assertEqual(
            header,
            "import { Alpha } from './Alpha';\n"
            "import type { Zeta } from './Zeta';\n"
            "\n",
        )

    def test_unresolved_name_falls_back_to_same_directory(self):
        diagnostics = TranspilerDiagnostics()
        ctx = CodeGenerationContext.from_registry(
            _registry([]), current_file_path='Models/User.cs', diagnostics=diagnostics
        )
        ctx.mark_import('Missing')
        entries = ImportGenerator(ctx).finalize()
        self.assertEqual(entries[0].path, './Missing')
        self.assertEqual(diagnostics.warnings[0].code, 'W002')

    def test_declared_names_are_excluded(self):
        ctx = CodeGenerationContext.from_registry(_registry([]), declared_names={'User'})
        ctx.mark_import('User')
        self.assertEqual(ImportGenerator(ctx).generate(), '')


class TestExpressionGenerator(unittest.TestCase):
    """Test the constant expression translator."""

    def setUp(self):
        self.ctx = CodeGenerationContext()
        self.expr = ExpressionGenerator(self.ctx)

    def test_literals(self):
        self.assertEqual(self.expr.generate(Literal('42')), '42')
        self.assertEqual(self.expr.generate(Literal('"hello"', 'string')), '"hello"')
        self.assertEqual(self.expr.generate(Literal('true', 'bool')), 'true')
        self.assertEqual(self.expr.generate(Literal('null', 'null')), 'null')

    def test_numeric_suffixes_are_dropped(self):
        self.assertEqual(self.expr.generate(Literal('10m')), '10')
        self.assertEqual(self.expr.generate(Literal('1.5f')), '1.5')
        self.assertEqual(self.expr.generate(Literal('3UL')), '3')
        self.assertEqual(self.expr.generate(Literal('0xFF')), '0xFF')

    def test_enum_member_records_value_import(self):
        result = self.expr.generate(EnumMemberReference('Role', 'Admin'))
        self.assertEqual(result, 'Role.Admin')
        self.assertFalse(self.ctx.is_type_only('Role'))
        self.assertIn('Role', self.ctx.imports)

    def test_negation_and_parentheses(self):
        expr = NegateExpression(ParenthesizedExpression(Literal('5')))
        self.assertEqual(self.expr.generate(expr), '-(5)')

    def test_array_and_spread(self):
        expr = ArrayLiteral([Literal('1'), SpreadElement(ConstantReference('Others', 2))])
        self.assertEqual(self.expr.generate(expr), '[1, ...2]')

    def test_constant_reference_is_requoted(self):
        self.assertEqual(self.expr.generate(ConstantReference('Prefix', "it's")), "'it\\'s'")
        self.assertEqual(self.expr.generate(ConstantReference('Enabled', True)), 'true')
        self.assertEqual(self.expr.generate(ConstantReference('Max', 10)), '10')
        self.assertIs(self.expr.generate(ConstantReference('Unknown')), UNSUPPORTED)

    def test_object_initializer(self):
        expr = ObjectCreation(
            NamedType('Options'),
            properties=[
                PropertyAssignment('MaxRetries', Literal('3')),
                PropertyAssignment('Inner', ObjectCreation(properties=[PropertyAssignment('X', Literal('1'))])),
            ],
        )
        self.assertEqual(
            self.expr.generate(expr),
            '{\n'
            '  maxRetries: 3,\n'
            '  inner: {\n'
            '    x: 1,\n'
            '  },\n'
            '}',
        )

    def test_collection_initializers(self):
        with_elements = ObjectCreation(GenericType('List', [PrimitiveType('int')]), elements=[Literal('1'), Literal('2')])
        self.assertEqual(self.expr.generate(with_elements), '[1, 2]')
        empty_list = ObjectCreation(GenericType('List', [PrimitiveType('int')]))
        self.assertEqual(self.expr.generate(empty_list), '[]')
        self.assertEqual(self.expr.generate(ObjectCreation(NamedType('Options'))), '{}')

    def test_unsupported_forms(self):
        for expr in (
            InvocationExpression('Compute'),
            BinaryExpression(Literal('1'), '+', Literal('2')),
            ConditionalExpression(Literal('true', 'bool'), Literal('1'), Literal('2')),
            OpaqueExpression('typeof(int)'),
        ):
            self.assertIs(self.expr.generate(expr), UNSUPPORTED)

    def test_unsupported_propagates_without_imports(self):
        expr = ArrayLiteral([EnumMemberReference('Role', 'Admin'), InvocationExpression('Compute')])
        self.assertIs(self.expr.generate(expr), UNSUPPORTED)
        self.assertEqual(self.ctx.imports, {})


class TestDocumentation(unittest.TestCase):
    """Test XML documentation comment rendering."""

    def test_summary(self):
        self.assertEqual(extract_sections('<summary>A user.</summary>'), [['A user.']])

    def test_comment_markers_and_dedent(self):
        raw = '/// <summary>\n///   First line.\n///   Second line.\n/// </summary>'
        self.assertEqual(extract_sections(raw), [['First line.', 'Second line.']])

    def test_inline_tags(self):
        raw = ('<summary>See <see cref="T:App.Models.User"/>.</summary>'
               '<remarks>Uses <c>id</c> of <paramref name="owner"/>.</remarks>')
        self.assertEqual(extract_sections(raw), [['See User.'], ['Uses `id` of owner.']])

    def test_malformed_xml_is_no_documentation(self):
        self.assertEqual(extract_sections('<summary>oops'), [])

    def test_plain_text_is_summary(self):
        self.assertEqual(extract_sections('Just text.'), [['Just text.']])

    def test_render_merges_hints(self):
        ctx = CodeGenerationContext(indent_level=1)
        block = DocumentationGenerator(ctx).render('<summary>How long to wait.</summary>', ['duration'])
        self.assertEqual(
            block,
            '  /**\n'
            '   * How long to wait.\n'
            '   *\n'
            '   * Duration in milliseconds.\n'
            '   */',
        )

    def test_render_nothing(self):
        self.assertIsNone(DocumentationGenerator(CodeGenerationContext()).render(None))


class TestInterfaceGeneration(unittest.TestCase):
    """Test structured type declarations rendered as interfaces."""

    def test_members_and_imports(self):
        role = _enum('Role', Member('User'), source_path='Models/Enums/Role.cs')
        user = Declaration('User', DeclarationKind.STRUCTURED_TYPE, 'Models/User.cs', members=[
            Member('Id', PrimitiveType('Guid')),
            Member('DisplayName', PrimitiveType('string')),
            Member('Role', NamedType('Role')),
            Member('Count', PrimitiveType('int'), is_static=True),
        ])
        output = _generate([user], known=[role])
        self.assertEqual(
            output,
            "import type { Role } from './Enums/Role';\n"
            "\n"
            "export interface User {\n"
            "  id: string;\n"
            "  displayName: string;\n"
            "  role: Role;\n"
            "}\n",
        )

    def test_generics_and_base_types(self):
        base = Declaration('PagedBase', DeclarationKind.STRUCTURED_TYPE, 'Models/PagedBase.cs')
        page = Declaration(
            'Page', DeclarationKind.STRUCTURED_TYPE, 'Models/Page.cs',
            members=[
                Member('Items', GenericType('List', [NamedType('T')])),
                Member('Total', PrimitiveType('int')),
            ],
            base_types=[NamedType('PagedBase')],
            type_parameters=['T'],
        )
        output = _generate([page], known=[base])
        self.assertEqual(
            output,
            "import type { PagedBase } from './PagedBase';\n"
            "\n"
            "export interface Page<T> extends PagedBase {\n"
            "  items: T[];\n"
            "  total: number;\n"
            "}\n",
        )

    def test_self_reference_is_not_imported(self):
        node = Declaration('TreeNode', DeclarationKind.STRUCTURED_TYPE, 'Models/TreeNode.cs', members=[
            Member('Children', GenericType('List', [NamedType('TreeNode')])),
            Member('Parent', NullableType(NamedType('TreeNode'))),
        ])
        output = _generate([node])
        self.assertNotIn('import', output)
        self.assertIn('  children: TreeNode[];\n', output)
        self.assertIn('  parent: TreeNode | null;\n', output)

    def test_type_and_value_usage_become_value_import(self):
        """Value usage wins no matter which usage is seen first."""
        role = _enum('Role', Member('Admin'), source_path='Models/Role.cs')
        type_first = Declaration('Admin', DeclarationKind.STRUCTURED_TYPE, 'Models/Admin.cs', members=[
            Member('Role', NamedType('Role')),
            Member('Kind', NamedType('Role'), initializer=EnumMemberReference('Role', 'Admin'), is_computed=True),
        ])
        value_first = Declaration('Admin', DeclarationKind.STRUCTURED_TYPE, 'Models/Admin.cs', members=[
            Member('Kind', NamedType('Role'), initializer=EnumMemberReference('Role', 'Admin'), is_computed=True),
            Member('Role', NamedType('Role')),
        ])
        for declaration in (type_first, value_first):
            output = _generate([declaration], known=[role])
            self.assertTrue(output.startswith("import { Role } from './Role';\n"))
            self.assertIn('  kind: typeof Role.Admin;\n', output)

    def test_computed_literal_member(self):
        declaration = Declaration('AdminUser', DeclarationKind.STRUCTURED_TYPE, 'Models/AdminUser.cs', members=[
            Member('Type', PrimitiveType('string'), initializer=Literal('"admin"', 'string'), is_computed=True),
            Member('Level', PrimitiveType('int'), initializer=Literal('3'), is_computed=True),
            Member('Label', PrimitiveType('string'), initializer=InvocationExpression('ToString'), is_computed=True),
        ])
        output = _generate([declaration])
        self.assertIn('  type: "admin";\n', output)
        self.assertIn('  level: 3;\n', output)
        self.assertIn('  label: string;\n', output)

    def test_capability_members(self):
        declaration = Declaration('Card', DeclarationKind.STRUCTURED_TYPE, 'Components/Card.cs', members=[
            Member('Icon', PrimitiveType('object'), capabilities=frozenset({CapabilityTag.RENDER_NODE})),
            Member('Anchor', PrimitiveType('object'), capabilities=frozenset({CapabilityTag.DOM_ELEMENT})),
        ])
        output = _generate([declaration])
        self.assertEqual(
            output,
            "import type { ReactNode } from 'react';\n"
            "\n"
            "export interface Card {\n"
            "  icon: ReactNode;\n"
            "  anchor: HTMLElement;\n"
            "}\n",
        )

    def test_documentation_blocks(self):
        declaration = Declaration(
            'User', DeclarationKind.STRUCTURED_TYPE, 'Models/User.cs',
            members=[Member('Name', PrimitiveType('string'), documentation='<summary>Display name.</summary>')],
            documentation='<summary>A registered user.</summary>',
        )
        output = _generate([declaration])
        self.assertEqual(
            output,
            "/**\n"
            " * A registered user.\n"
            " */\n"
            "export interface User {\n"
            "  /**\n"
            "   * Display name.\n"
            "   */\n"
            "  name: string;\n"
            "}\n",
        )

    def test_wire_format_hints_end_to_end(self):
        declaration = Declaration('Timing', DeclarationKind.STRUCTURED_TYPE, 'Models/Timing.cs', members=[
            Member('Timeout', NullableType(PrimitiveType('TimeSpan'))),
            Member('CreatedAt', NullableType(PrimitiveType('DateTimeOffset'))),
        ])
        output = _generate([declaration])
        self.assertEqual(
            output,
            "export interface Timing {\n"
            "  /**\n"
            "   * Duration in milliseconds.\n"
            "   */\n"
            "  timeout: number | null;\n"
            "  /**\n"
            "   * ISO-8601 date-time string with UTC offset.\n"
            "   */\n"
            "  createdAt: string | null;\n"
            "}\n",
        )


class TestEnumGeneration(unittest.TestCase):
    """Test enums rendered as frozen objects, union types and reverse lookups."""

    def test_implicit_values(self):
        output = _generate([_enum('Status', Member('A'), Member('B'))])
        self.assertEqual(
            output,
            "export const Status = Object.freeze({\n"
            "  A: 0,\n"
            "  B: 1,\n"
            "} as const);\n"
            "\n"
            "export type Status = (typeof Status)[keyof typeof Status];\n"
            "\n"
            "export const StatusNames = Object.freeze({\n"
            "  0: 'A',\n"
            "  1: 'B',\n"
            "} as Record<Status, keyof typeof Status>);\n",
        )

    def test_negative_value_uses_computed_key(self):
        output = _generate([_enum(
            'Priority',
            Member('Unknown', initializer=NegateExpression(Literal('1'))),
            Member('Low'),
            Member('High', initializer=Literal('10')),
        )])
        self.assertIn('  Unknown: -1,\n  Low: 0,\n  High: 10,\n', output)
        self.assertIn("  [-1]: 'Unknown',\n  0: 'Low',\n  10: 'High',\n", output)

    def test_resolved_values_win(self):
        output = _generate([_enum(
            'Flags',
            Member('None', value=0),
            Member('Read', value=1, initializer=BinaryExpression(Literal('1'), '<<', Literal('0'))),
            Member('Write', value=2, initializer=BinaryExpression(Literal('1'), '<<', Literal('1'))),
        )])
        self.assertIn('  None: 0,\n  Read: 1,\n  Write: 2,\n', output)

    def test_flags_initializers_are_evaluated(self):
        diagnostics = TranspilerDiagnostics()

        def shift(n):
            return BinaryExpression(Literal('1'), '<<', Literal(str(n)))

        output = _generate([_enum(
            'Perm',
            Member('None', initializer=Literal('0')),
            Member('Read', initializer=shift(0)),
            Member('Write', initializer=shift(1)),
            Member('Exec', initializer=ParenthesizedExpression(shift(2))),
            Member('ReadWrite', initializer=BinaryExpression(
                EnumMemberReference('Perm', 'Read'), '|', ConstantReference('Write'))),
            Member('All', initializer=BinaryExpression(
                EnumMemberReference('Perm', 'ReadWrite'), '|', EnumMemberReference('Perm', 'Exec'))),
        )], diagnostics=diagnostics)
        self.assertIn('  None: 0,\n  Read: 1,\n  Write: 2,\n  Exec: 4,\n  ReadWrite: 3,\n  All: 7,\n', output)
        self.assertIn("  4: 'Exec',\n  3: 'ReadWrite',\n  7: 'All',\n", output)
        self.assertEqual(diagnostics.warnings, [])

    def test_alias_member_takes_earlier_value(self):
        output = _generate([_enum(
            'Level',
            Member('Low', initializer=Literal('5')),
            Member('Default', initializer=ConstantReference('Low')),
            Member('High'),
        )])
        self.assertIn('  Low: 5,\n  Default: 5,\n  High: 6,\n', output)

    def test_unresolvable_initializer_is_omitted(self):
        diagnostics = TranspilerDiagnostics()
        output = _generate([_enum(
            'Mode',
            Member('Off'),
            Member('Auto', initializer=InvocationExpression('Compute')),
            Member('Manual'),
            Member('Forced', initializer=Literal('9')),
        )], diagnostics=diagnostics)
        self.assertIn('  Off: 0,\n  Forced: 9,\n} as const);', output)
        self.assertIn("  0: 'Off',\n  9: 'Forced',\n}", output)
        self.assertNotIn('Auto', output)
        self.assertNotIn('Manual', output)
        self.assertEqual([d.code for d in diagnostics.warnings], ['W007', 'W007'])

    def test_duplicate_values_keep_first_member(self):
        diagnostics = TranspilerDiagnostics()
        output = _generate([_enum('Level', Member('Low', value=1), Member('Minimal', value=1))], diagnostics=diagnostics)
        self.assertIn("  1: 'Low',\n", output)
        self.assertNotIn("'Minimal'", output)
        self.assertEqual([d.code for d in diagnostics.warnings], ['W005'])

    def test_member_documentation(self):
        output = _generate([_enum('Color', Member('Red', documentation='<summary>Warm.</summary>'))])
        self.assertIn('export const Color = Object.freeze({\n  /**\n   * Warm.\n   */\n  Red: 0,\n', output)


class TestConstantGeneration(unittest.TestCase):
    """Test constant holders rendered as exported consts."""

    def test_untranslatable_field_is_dropped(self):
        diagnostics = TranspilerDiagnostics()
        holder = Declaration('Limits', DeclarationKind.CONSTANT_HOLDER, 'Config/Limits.cs', members=[
            Member('MaxItems', PrimitiveType('int'), initializer=Literal('100'), is_const=True),
            Member('Computed', PrimitiveType('int'), initializer=InvocationExpression('Compute'),
                   is_static=True, is_read_only=True),
        ])
        output = _generate([holder], diagnostics=diagnostics)
        self.assertEqual(output, 'export const MaxItems: number = 100;\n')
        self.assertEqual([d.code for d in diagnostics.warnings], ['W001'])

    def test_dropped_field_leaves_no_import(self):
        role = _enum('Role', Member('Admin'), source_path='Config/Role.cs')
        holder = Declaration('Defaults', DeclarationKind.CONSTANT_HOLDER, 'Config/Defaults.cs', members=[
            Member('Name', PrimitiveType('string'), initializer=Literal('"guest"', 'string'), is_const=True),
            Member('Role', NamedType('Role'),
                   initializer=BinaryExpression(EnumMemberReference('Role', 'Admin'), '|', Literal('1')),
                   is_static=True, is_read_only=True),
        ])
        output = _generate([holder], known=[role])
        self.assertEqual(output, 'export const Name: string = "guest";\n')

    def test_enum_value_constant_imports_enum(self):
        role = _enum('Role', Member('User'), source_path='Models/Role.cs')
        holder = Declaration('Defaults', DeclarationKind.CONSTANT_HOLDER, 'Config/Defaults.cs', members=[
            Member('DefaultRole', NamedType('Role'), initializer=EnumMemberReference('Role', 'User'),
                   is_static=True, is_read_only=True, documentation='<summary>Role of new users.</summary>'),
            Member('Roles', ArrayType(NamedType('Role')),
                   initializer=ArrayLiteral([EnumMemberReference('Role', 'User')]),
                   is_static=True, is_read_only=True),
            Member('Instance', PrimitiveType('int'), initializer=Literal('1')),
        ])
        output = _generate([holder], known=[role])
        self.assertEqual(
            output,
            "import { Role } from '../Models/Role';\n"
            "\n"
            "/**\n"
            " * Role of new users.\n"
            " */\n"
            "export const DefaultRole: Role = Role.User;\n"
            "\n"
            "export const Roles: Role[] = [Role.User];\n",
        )

    def test_only_untranslatable_fields_yield_no_file(self):
        holder = Declaration('Empty', DeclarationKind.CONSTANT_HOLDER, 'Config/Empty.cs', members=[
            Member('Now', PrimitiveType('DateTime'), initializer=OpaqueExpression('DateTime.Now'),
                   is_static=True, is_read_only=True),
        ])
        self.assertIsNone(_generate([holder]))


class TestFileGeneration(unittest.TestCase):
    """Test whole-file assembly."""

    def test_declarations_are_separated_by_blank_lines(self):
        status = _enum('Status', Member('On'), source_path='Models/Order.cs')
        order = Declaration('Order', DeclarationKind.STRUCTURED_TYPE, 'Models/Order.cs', members=[
            Member('Status', NamedType('Status')),
        ])
        output = _generate([order, status])
        self.assertNotIn('import', output)
        self.assertIn('export interface Order {\n  status: Status;\n}\n\nexport const Status', output)
        self.assertTrue(output.endswith('as Record<Status, keyof typeof Status>);\n'))

    def test_unknown_kind_is_skipped(self):
        diagnostics = TranspilerDiagnostics()
        weird = Declaration('Handler', DeclarationKind.UNKNOWN, 'Models/Handler.cs')
        user = Declaration('User', DeclarationKind.STRUCTURED_TYPE, 'Models/Handler.cs')
        output = _generate([weird, user], diagnostics=diagnostics)
        self.assertEqual(output, 'export interface User {\n}\n')
        self.assertEqual([d.code for d in diagnostics.warnings], ['W006'])

    def test_reference_to_unknown_kind_uses_fallback_import(self):
        diagnostics = TranspilerDiagnostics()
        handler = Declaration('Handler', DeclarationKind.UNKNOWN, 'Handlers/Handler.cs')
        user = Declaration('User', DeclarationKind.STRUCTURED_TYPE, 'Models/User.cs', members=[
            Member('OnSave', NamedType('Handler')),
        ])
        output = _generate([user], known=[handler], diagnostics=diagnostics)
        self.assertTrue(output.startswith("import type { Handler } from './Handler';\n"))
        self.assertEqual([d.code for d in diagnostics.warnings], ['W002'])

    def test_summary_groups_warnings(self):
        diagnostics = TranspilerDiagnostics()
        _generate([_enum('Mode', Member('Auto', initializer=OpaqueExpression('Compute()')))],
                  diagnostics=diagnostics)
        out = io.StringIO()
        diagnostics.print_summary(file=out)
        self.assertIn('Generator warnings (1):', out.getvalue())
        self.assertIn('enum: 1 occurrence(s)', out.getvalue())


class TestTypeRegistry(unittest.TestCase):
    """Test the two-phase declaration registry."""

    def test_paths_are_stored_without_extension(self):
        registry = TypeRegistry()
        registry.register('User', 'Models\\User.cs')
        registry.seal()
        self.assertEqual(registry.get_path('User'), 'Models/User')
        self.assertIsNone(registry.get_path('Missing'))

    def test_lookup_before_seal_raises(self):
        registry = TypeRegistry()
        registry.register('User', 'Models/User.cs')
        with self.assertRaises(RuntimeError):
            registry.get_path('User')

    def test_register_after_seal_raises(self):
        registry = TypeRegistry()
        registry.seal()
        with self.assertRaises(RuntimeError):
            registry.register('User', 'Models/User.cs')

    def test_duplicate_is_last_write_wins(self):
        diagnostics = TranspilerDiagnostics()
        registry = TypeRegistry(diagnostics)
        registry.register('User', 'Models/User.cs')
        registry.register('User', 'Legacy/User.cs')
        registry.seal()
        self.assertEqual(registry.get_path('User'), 'Legacy/User')
        self.assertEqual([d.code for d in diagnostics.warnings], ['W004'])

    def test_unknown_kind_is_not_registered(self):
        handler = Declaration('Handler', DeclarationKind.UNKNOWN, 'Handlers/Handler.cs')
        registry = _registry([_enum('Role'), handler])
        self.assertEqual(registry.get_path('Role'), 'Models/Enums')
        self.assertIsNone(registry.get_path('Handler'))


class TestLoader(unittest.TestCase):
    """Test the JSON declaration loader."""

    def test_declaration_document(self):
        document = {
            'declarations': [{
                'name': 'User',
                'kind': 'class',
                'sourcePath': 'Models\\User.cs',
                'baseTypes': ['EntityBase'],
                'members': [
                    {'name': 'Id', 'type': 'Guid'},
                    {'name': 'Avatar', 'type': 'object', 'attributes': ['Cs2Ts.ReactNodeAttribute', 'Required']},
                    {'name': 'Tags', 'type': {'kind': 'generic', 'name': 'List', 'arguments': ['string']}},
                ],
            }],
        }
        [user] = declarations_from_json(json.dumps(document))
        self.assertEqual(user.kind, DeclarationKind.STRUCTURED_TYPE)
        self.assertEqual(user.source_path, 'Models/User.cs')
        self.assertEqual(user.base_types, [NamedType('EntityBase')])
        self.assertEqual(user.members[0].type, PrimitiveType('Guid'))
        self.assertEqual(user.members[1].capabilities, frozenset({CapabilityTag.RENDER_NODE}))
        self.assertEqual(user.members[2].type, GenericType('List', [PrimitiveType('string')]))

    def test_unknown_kind(self):
        declaration = declaration_from_dict({'name': 'Handler', 'kind': 'delegate', 'sourcePath': 'H.cs'})
        self.assertEqual(declaration.kind, DeclarationKind.UNKNOWN)

    def test_unknown_expression_is_opaque(self):
        member = declaration_from_dict({
            'name': 'Limits', 'kind': 'constant-holder', 'sourcePath': 'Limits.cs',
            'members': [{'name': 'Max', 'isConst': True, 'initializer': {'kind': 'lambda', 'text': 'x => x'}}],
        }).members[0]
        self.assertEqual(member.initializer, OpaqueExpression('x => x'))
        self.assertTrue(member.is_const)

    def test_type_shapes(self):
        self.assertEqual(
            type_from_dict({'kind': 'nullable', 'inner': {'kind': 'array', 'element': 'int'}}),
            NullableType(ArrayType(PrimitiveType('int'))),
        )
        self.assertEqual(
            type_from_dict({'kind': 'function', 'parameters': ['int'], 'returns': None}),
            FunctionType([PrimitiveType('int')], None),
        )
        self.assertEqual(type_from_dict('App.Models.User'), NamedType('User', 'App.Models'))

    def test_errors(self):
        with self.assertRaises(ValueError):
            declarations_from_json('{not json')
        with self.assertRaises(ValueError):
            declarations_from_json('[{"kind": "enum", "sourcePath": "E.cs"}]')
        with self.assertRaises(ValueError):
            declarations_from_json('{"items": []}')

    def test_loaded_and_built_declarations_match(self):
        built = _enum('Status', Member('Active', initializer=Literal('1')), Member('Closed'), source_path='Models/Status.cs')
        [loaded] = declarations_from_json(json.dumps([{
            'name': 'Status', 'kind': 'enum', 'sourcePath': 'Models/Status.cs',
            'members': [
                {'name': 'Active', 'initializer': {'kind': 'literal', 'text': '1'}},
                {'name': 'Closed'},
            ],
        }]))
        self.assertEqual(_generate([loaded]), _generate([built]))


class TestTranspiler(unittest.TestCase):
    """Test the two-phase orchestrator and the command line."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.declarations = [
            _enum('Role', Member('User'), Member('Admin'), source_path='Models/Enums/Role.cs'),
            Declaration('User', DeclarationKind.STRUCTURED_TYPE, 'Models/User.cs', members=[
                Member('Role', NamedType('Role')),
                Member('Started', PrimitiveType('Instant')),
            ]),
        ]

    def tearDown(self):
        self.tmp.cleanup()

    def test_transpile_outputs_banner_and_ts_paths(self):
        out = self.root / 'out'
        results = DeclarationToTypeScriptTranspiler(str(out)).transpile(self.declarations)
        self.assertEqual(
            set(results),
            {str(out / 'Models' / 'Enums' / 'Role.ts'), str(out / 'Models' / 'User.ts')},
        )
        user = results[str(out / 'Models' / 'User.ts')]
        self.assertTrue(user.startswith(DEFAULT_BANNER + "import type { Role } from './Enums/Role';\n"))

    def test_parallel_run_matches_sequential(self):
        sequential = DeclarationToTypeScriptTranspiler(str(self.root)).transpile(self.declarations)
        parallel = DeclarationToTypeScriptTranspiler(str(self.root), jobs=4).transpile(self.declarations)
        self.assertEqual(sequential, parallel)

    def test_transpile_can_run_twice(self):
        transpiler = DeclarationToTypeScriptTranspiler(str(self.root))
        first = transpiler.transpile(self.declarations)
        second = transpiler.transpile(self.declarations)
        self.assertEqual(first, second)

    def test_type_overrides(self):
        transpiler = DeclarationToTypeScriptTranspiler(
            str(self.root),
            type_overrides={'primitives': {'Instant': 'string'}, 'hints': {'Instant': 'date-time-offset'}},
        )
        results = transpiler.transpile(self.declarations)
        user = results[str(self.root / 'Models' / 'User.ts')]
        self.assertIn('ISO-8601 date-time string with UTC offset.', user)
        self.assertIn('  started: string;\n', user)

    def test_invalid_type_overrides_file_is_ignored(self):
        overrides = self.root / 'overrides.json'
        overrides.write_text('{broken')
        with redirect_stdout(io.StringIO()) as out:
            transpiler = DeclarationToTypeScriptTranspiler(str(self.root), type_overrides=str(overrides))
        self.assertIn('Warning', out.getvalue())
        self.assertEqual(transpiler.primitive_overrides, {})

    def test_clean_output_dir(self):
        out = self.root / 'out'
        (out / 'Old' / 'Nested').mkdir(parents=True)
        (out / 'Old' / 'Nested' / 'Stale.ts').write_text('')
        (out / 'keep.json').write_text('{}')
        DeclarationToTypeScriptTranspiler(str(out)).clean_output_dir()
        self.assertFalse((out / 'Old').exists())
        self.assertTrue((out / 'keep.json').exists())
        self.assertTrue(out.is_dir())

    def test_main_writes_files(self):
        source = self.root / 'declarations.json'
        source.write_text(json.dumps({'declarations': [
            {'name': 'Role', 'kind': 'enum', 'sourcePath': 'Models/Role.cs', 'members': [{'name': 'User'}]},
        ]}))
        out = self.root / 'generated'
        with redirect_stdout(io.StringIO()):
            status = main([str(source), '-o', str(out)])
        self.assertEqual(status, 0)
        content = (out / 'Models' / 'Role.ts').read_text()
        self.assertTrue(content.startswith(DEFAULT_BANNER))
        self.assertIn("export const RoleNames = Object.freeze({\n  0: 'User',\n", content)

    def test_main_rejects_bad_input(self):
        source = self.root / 'declarations.json'
        source.write_text('not json')
        with redirect_stdout(io.StringIO()):
            self.assertEqual(main([str(source), '-o', str(self.root / 'generated')]), 1)
            self.assertEqual(main([os.path.join(self.tmp.name, 'missing.json')]), 1)


if __name__ == '__main__':
    # Run tests with verbosity
    unittest.main(verbosity=2)

#!/usr/bin/env python3
"""
Unit tests for JSX and TSX code generation.

Run with: python3 -m pytest jsxdsl/test_codegen.py
   or: python3 jsxdsl/test_codegen.py
"""

import sys
import os
# Add parent directory to path so the package imports when run as a script
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json
import unittest
from jsxdsl.lexer import Lexer, tokenize
from jsxdsl.parser import Parser
from jsxdsl.codegen import (
    generate,
    generate_typed,
    GenerateOptions,
    CompilerDiagnostics,
    CodeGenerationContext,
    ExpressionGenerator,
    MarkupGenerator,
    PositionMap,
    encode_vlq,
    extract_dependencies,
    callback_dependencies,
    rename_identifier,
)
from jsxdsl.codegen import naming
from jsxdsl.type_system import type_to_ts
from jsxdsl.parser import SimpleType, ArrayType, UnionType, GenericType


def parse_source(source):
    return Parser(Lexer(source).tokenize()).parse()


def parse_expression(source):
    return Parser(tokenize(source)).parse_expression()


def compile_plain(source, component_name='Component', diagnostics=None):
    return generate(parse_source(source), component_name, diagnostics)


def compile_typed(source, component_name='Component', diagnostics=None):
    options = GenerateOptions(component_name=component_name)
    return generate_typed(parse_source(source), options=options, diagnostics=diagnostics).code


COUNTER_SOURCE = '@count = 0\n!click = count++\n<btn @click=click>{count}</btn>'


class TestNamingConventions(unittest.TestCase):
    """Test the derived identifier names."""

    def test_derived_names(self):
        self.assertEqual(naming.setter_name('count'), 'setCount')
        self.assertEqual(naming.reducer_function_name('count'), 'countReducer')
        self.assertEqual(naming.dispatch_name('count'), 'dispatchCount')
        self.assertEqual(naming.pending_flag_name('submit'), 'isPendingSubmit')
        self.assertEqual(naming.transition_starter_name('submit'), 'startSubmitTransition')
        self.assertEqual(naming.optimistic_updater_name('likes'), 'addLikes')
        self.assertEqual(naming.action_name('save'), 'saveAction')
        self.assertEqual(naming.context_object_name('theme'), 'ThemeContext')

    def test_capitalize_only_touches_first_character(self):
        self.assertEqual(naming.capitalize('userName'), 'UserName')
        self.assertEqual(naming.capitalize(''), '')


class TestDependencyExtraction(unittest.TestCase):
    """Test dependency arrays for memos, callbacks and effects."""

    def test_memo_dependencies_in_first_seen_order(self):
        self.assertEqual(extract_dependencies(parse_expression('a + b.method(c)')), ['a', 'b', 'c'])

    def test_each_identifier_once(self):
        self.assertEqual(extract_dependencies(parse_expression('a + b + a.length')), ['a', 'b'])

    def test_callback_parameters_are_excluded(self):
        self.assertEqual(callback_dependencies(parse_expression('(x) => x + total')), ['total'])

    def test_nested_arrow_parameters_are_excluded(self):
        expr = parse_expression('items.map(i => i * factor)')
        self.assertEqual(extract_dependencies(expr), ['items', 'factor'])

    def test_literal_keywords_are_not_dependencies(self):
        expr = parse_expression('[true, false, null, undefined, flag]')
        self.assertEqual(extract_dependencies(expr), ['flag'])

    def test_multiple_expressions(self):
        exprs = [parse_expression('a'), parse_expression('b + a')]
        self.assertEqual(extract_dependencies(*exprs), ['a', 'b'])

    def test_unknown_node_raises(self):
        with self.assertRaises(TypeError):
            extract_dependencies(object())


class TestRenaming(unittest.TestCase):
    """Test identifier rewriting used by reducers and loops."""

    def test_rename_leaves_original_untouched(self):
        expr = parse_expression('s + s.length')
        renamed = rename_identifier(expr, 's', 'state')
        ctx = CodeGenerationContext()
        self.assertEqual(ExpressionGenerator(ctx).generate(renamed), 'state + state.length')
        self.assertEqual(ExpressionGenerator(ctx).generate(expr), 's + s.length')

    def test_shadowing_arrow_is_not_renamed(self):
        expr = parse_expression('list.map(item => item)')
        renamed = rename_identifier(expr, 'item', '_item')
        self.assertEqual(renamed, expr)


class TestTypeMappings(unittest.TestCase):
    """Test DSL type annotation to TypeScript conversion."""

    def test_aliases(self):
        self.assertEqual(type_to_ts(SimpleType('str')), 'string')
        self.assertEqual(type_to_ts(SimpleType('num')), 'number')
        self.assertEqual(type_to_ts(SimpleType('bool')), 'boolean')
        self.assertEqual(type_to_ts(SimpleType('User')), 'User')

    def test_compound_types(self):
        self.assertEqual(type_to_ts(ArrayType('str')), 'string[]')
        self.assertEqual(type_to_ts(UnionType([SimpleType('str'), SimpleType('num')])), 'string | number')
        self.assertEqual(
            type_to_ts(GenericType('Map', [SimpleType('str'), ArrayType('num')])),
            'Map<string, number[]>',
        )

    def test_missing_type_is_any(self):
        self.assertEqual(type_to_ts(None), 'any')


class TestPlainGeneration(unittest.TestCase):
    """Test JSX output."""

    def test_counter(self):
        expected = '\n'.join([
            "import React, { useState } from 'react';",
            "",
            "function Component() {",
            "  const [count, setCount] = useState(0);",
            "",
            "  const click = () => setCount(count + 1);",
            "",
            "  return (",
            "    <button onClick={click}>{count}</button>",
            "  );",
            "}",
            "",
            "export default Component;",
        ])
        self.assertEqual(compile_plain(COUNTER_SOURCE), expected)

    def test_output_is_deterministic(self):
        self.assertEqual(compile_plain(COUNTER_SOURCE), compile_plain(COUNTER_SOURCE))

    def test_component_name_and_props(self):
        code = compile_plain(':label\n:step\n<p>{label}</p>', 'Counter')
        self.assertIn('function Counter({ label, step }) {', code)
        self.assertIn('export default Counter;', code)
        self.assertIn("import React from 'react';", code)

    def test_update_lowering(self):
        code = compile_plain('@count = 0\n!down = count--\n!add = count += step\n!reset = count')
        self.assertIn('const down = () => setCount(count - 1);', code)
        self.assertIn('const add = () => setCount(count + step);', code)
        self.assertIn('const reset = () => count;', code)

    def test_push_on_list_state_appends(self):
        code = compile_plain('@todos = []\n@input = ""\n!add = todos.push(input)')
        self.assertIn('const [input, setInput] = useState("");', code)
        self.assertIn('const add = () => setTodos([...todos, input]);', code)

    def test_push_on_non_collection_warns(self):
        diagnostics = CompilerDiagnostics()
        code = compile_typed('@name::str = ""\n!add = name.push(x)\n<p>{name}</p>', diagnostics=diagnostics)
        self.assertIn('const add = () => name.push(x);', code)
        self.assertEqual([d.code for d in diagnostics.warnings], ['W002'])
        self.assertEqual(diagnostics.warnings[0].line, 2)

    def test_literals(self):
        code = compile_plain('@title = "Say \\"hi\\""\n@ratio = 1.5\n@items = [1, 2]')
        self.assertIn('useState("Say \\"hi\\"")', code)
        self.assertIn('useState(1.5)', code)
        self.assertIn('useState([1, 2])', code)

    def test_memo_and_callback(self):
        code = compile_plain('%sum = a + b.method(c)\n^handler = (x) => x + total')
        self.assertIn('const sum = useMemo(() => a + b.method(c), [a, b, c]);', code)
        self.assertIn('const handler = useCallback((x) => x + total, [total]);', code)
        self.assertIn("import React, { useCallback, useMemo } from 'react';", code)

    def test_effects(self):
        code = compile_plain('@count = 0\n$log(count)\n$$measure(box, count)')
        self.assertIn(
            '  useEffect(() => {\n    console.log(count);\n  }, [count]);',
            code,
        )
        self.assertIn(
            '  useLayoutEffect(() => {\n    measure(box, count);\n  }, [box, count]);',
            code,
        )
        self.assertIn("import React, { useState, useEffect, useLayoutEffect } from 'react';", code)

    def test_reducer(self):
        code = compile_plain('@count:reducer = {0, {increment: (s) => s + 1, reset: (s) => 0}}\n<p>{count}</p>')
        expected_function = '\n'.join([
            "function countReducer(state, action) {",
            "  switch (action.type) {",
            "    case 'increment': return state + 1;",
            "    case 'reset': return 0;",
            "    default: return state;",
            "  }",
            "}",
        ])
        self.assertIn(expected_function, code)
        self.assertIn('const [count, dispatchCount] = useReducer(countReducer, 0);', code)
        self.assertIn("import React, { useReducer } from 'react';", code)
        self.assertLess(code.index('function countReducer'), code.index('function Component'))

    def test_reducer_expression_handler_reads_state(self):
        code = compile_plain('@count:reducer = {0, {increment: count + 1}}\n<p>{count}</p>')
        self.assertIn("case 'increment': return state + 1;", code)
        self.assertNotIn('return count + 1', code)

    def test_concurrent_hooks(self):
        code = compile_plain(
            '@query = ""\n@slow:deferred = query\n@likes:optimistic = {count, (c, n) => c + n}\n'
            '@submit:transition\n!!save = {saveData, 0}\n?fieldId\n'
            '&&online = {subscribe, getSnapshot}'
        )
        self.assertIn('const slow = useDeferredValue(query);', code)
        self.assertIn('const [likes, addLikes] = useOptimistic(count, (c, n) => c + n);', code)
        self.assertIn('const [isPendingSubmit, startSubmitTransition] = useTransition();', code)
        self.assertIn('const [save, saveAction, isPendingSave] = useActionState(saveData, 0);', code)
        self.assertIn('const fieldId = useId();', code)
        self.assertIn('const online = useSyncExternalStore(subscribe, getSnapshot);', code)
        self.assertIn(
            "import React, { useState, useTransition, useDeferredValue, useOptimistic, "
            "useSyncExternalStore, useActionState, useId } from 'react';",
            code,
        )

    def test_declaration_order(self):
        code = compile_plain(
            '!click = count++\n%double = count * 2\n#box\n&theme\n?fieldId\n@count = 0'
        )
        positions = [
            code.index('useState('),
            code.index('useId('),
            code.index('useContext('),
            code.index('useRef('),
            code.index('useMemo('),
            code.index('const click'),
        ]
        self.assertEqual(positions, sorted(positions))

    def test_context(self):
        code = compile_plain('&theme\n<p>{theme}</p>')
        self.assertIn('const theme = useContext(ThemeContext);', code)
        self.assertIn("import { ThemeContext } from './ThemeContext';", code)

    def test_refs(self):
        code = compile_plain('#input\n#count = 0')
        self.assertIn('const input = useRef(null);', code)
        self.assertIn('const count = useRef(0);', code)

    def test_imperative_handle(self):
        code = compile_plain('#input\n~focus = () => input.focus()\n<input ref={input} />')
        self.assertIn("import React, { useRef, useImperativeHandle, forwardRef } from 'react';", code)
        self.assertIn('const Component = forwardRef(function Component(props, ref) {', code)
        self.assertIn(
            '  useImperativeHandle(ref, () => ({\n    focus: () => input.focus(),\n  }));',
            code,
        )
        self.assertIn('\n});\n\nexport default Component;', code)

    def test_imperative_handle_with_props(self):
        code = compile_plain(':label\n~focus = () => 0')
        self.assertIn('forwardRef(function Component({ label }, ref) {', code)


class TestMarkupGeneration(unittest.TestCase):
    """Test markup lowering."""

    def test_each_loop_uses_fixed_item_name(self):
        code = compile_plain('@items = []\n<ul><each item in items><li>{item}</li></each></ul>')
        expected = '\n'.join([
            "    <ul>",
            "      {items.map((_item, _index) => (",
            "        <li>{_item}</li>",
            "      ))}",
            "    </ul>",
        ])
        self.assertIn(expected, code)
        self.assertNotIn('{item}', code)

    def test_loop_item_binding_has_no_setter(self):
        code = compile_plain('@items = []\n<ul><each item in items><li><input val={item} /></li></each></ul>')
        self.assertIn('<input value={_item} />', code)
        self.assertNotIn('set_item', code)

    def test_outer_loop_variable_in_nested_loop_warns(self):
        diagnostics = CompilerDiagnostics()
        compile_plain(
            '@rows = []\n@cols = []\n'
            '<ul><each row in rows><li><each cell in cols><span>{row}</span></each></li></each></ul>',
            diagnostics=diagnostics,
        )
        self.assertEqual([d.code for d in diagnostics.warnings], ['W004'])
        self.assertIn('"row"', diagnostics.warnings[0].message)

    def test_nested_loop_over_outer_item_does_not_warn(self):
        diagnostics = CompilerDiagnostics()
        code = compile_plain(
            '@rows = []\n<ul><each row in rows><li><each cell in row><span>{cell}</span></each></li></each></ul>',
            diagnostics=diagnostics,
        )
        self.assertIn('{_item.map((_item, _index) => (', code)
        self.assertEqual(diagnostics.count, 0)

    def test_attribute_lowering(self):
        code = compile_plain(
            '@name = ""\n<form @submit=save @hover=peek>\n'
            '  <input val={name} />\n  <input val="fixed" />\n'
            '  <select on={pick} />\n  <input disabled class={style} />\n</form>'
        )
        self.assertIn('<form onSubmit={save} onHover={peek}>', code)
        self.assertIn('<input value={name} onChange={(e) => setName(e.target.value)} />', code)
        self.assertIn('<input value={"fixed"} />', code)
        self.assertIn('<select onChange={pick} />', code)
        self.assertIn('<input disabled={true} class={style} />', code)

    def test_inline_and_block_children(self):
        code = compile_plain('<div>\n  <p>Count: {count}</p>\n  <span>x</span>\n</div>')
        expected = '\n'.join([
            "    <div>",
            "      <p>Count : {count}</p>",
            "      <span>x</span>",
            "    </div>",
        ])
        self.assertIn(expected, code)

    def test_fragment(self):
        code = compile_plain('<h1>Title</h1>\n<p>Body</p>')
        self.assertIn('    <>\n      <h1>Title</h1>\n      <p>Body</p>\n    </>', code)

    def test_unknown_tags_pass_through(self):
        code = compile_plain('<Card title={name} />')
        self.assertIn('<Card title={name} />', code)

    def test_missing_markup_renders_empty_div(self):
        diagnostics = CompilerDiagnostics()
        code = compile_plain('@count = 0', diagnostics=diagnostics)
        self.assertIn('  return (\n    <div />\n  );', code)
        self.assertEqual([d.code for d in diagnostics.warnings], ['W003'])

    def test_unknown_markup_node_raises(self):
        generator = MarkupGenerator(CodeGenerationContext(), ExpressionGenerator(CodeGenerationContext()))
        with self.assertRaises(TypeError):
            generator.generate(object(), 0)

    def test_unknown_expression_node_raises(self):
        with self.assertRaises(TypeError):
            ExpressionGenerator(CodeGenerationContext()).generate(object())


class TestTypedGeneration(unittest.TestCase):
    """Test TSX output."""

    def test_props_interface(self):
        code = compile_typed(':label::str\n:count\n<p>{label}</p>', 'Counter')
        self.assertIn('interface CounterProps {\n  label: string;\n  count: any;\n}', code)
        self.assertIn('function Counter({ label, count }: CounterProps) {', code)

    def test_type_arguments(self):
        code = compile_typed(
            '@todos::str[] = []\n@value::str | num = 0\n%double::num = value * 2\n'
            '#input::HTMLInputElement\n&theme::Theme'
        )
        self.assertIn('const [todos, setTodos] = useState<string[]>([]);', code)
        self.assertIn('const [value, setValue] = useState<string | number>(0);', code)
        self.assertIn('const double = useMemo<number>(() => value * 2, [value]);', code)
        self.assertIn('const input = useRef<HTMLInputElement>(null);', code)
        self.assertIn('const theme = useContext<Theme>(ThemeContext);', code)

    def test_untyped_declarations_have_no_type_arguments(self):
        code = compile_typed('@count = 0')
        self.assertIn('useState(0)', code)

    def test_typed_reducer_signature(self):
        code = compile_typed('@count:reducer = {0, {increment: (s) => s + 1}}')
        self.assertIn('function countReducer(state: any, action: { type: string }) {', code)

    def test_typed_each_loop(self):
        code = compile_typed('@todos::str[] = []\n<ul><each item::str in todos><li>{item}</li></each></ul>')
        self.assertIn('{todos.map((_item: string, _index) => (', code)

    def test_typed_handles(self):
        code = compile_typed(':label::str\n#input\n~focus = () => input.focus()', 'Field')
        self.assertIn('interface FieldHandle {\n  focus: (...args: any[]) => any;\n}', code)
        self.assertIn(
            'const Field = forwardRef<FieldHandle, FieldProps>(function Field({ label }: FieldProps, ref) {',
            code,
        )

    def test_typed_handles_without_props(self):
        code = compile_typed('~reset = () => 0')
        self.assertIn('forwardRef<ComponentHandle>(function Component(props, ref) {', code)

    def test_no_position_map_by_default(self):
        output = generate_typed(parse_source(COUNTER_SOURCE), 'Counter.tsx.dsl')
        self.assertIsNone(output.position_map)

    def test_no_position_map_without_source(self):
        output = generate_typed(parse_source(COUNTER_SOURCE), None, GenerateOptions(source_map=True))
        self.assertIsNone(output.position_map)

    def test_position_map(self):
        options = GenerateOptions(component_name='Counter', output_file='Counter.tsx', source_map=True)
        output = generate_typed(parse_source(COUNTER_SOURCE), 'Counter.tsx.dsl', options)
        self.assertEqual(output.position_map.mappings, [(4, 1), (6, 2)])
        document = json.loads(output.position_map.to_json())
        self.assertEqual(document['version'], 3)
        self.assertEqual(document['file'], 'Counter.tsx')
        self.assertEqual(document['sources'], ['Counter.tsx.dsl'])
        self.assertEqual(document['mappings'], ';;;AAAA;;AACA')


class TestPositionMap(unittest.TestCase):
    """Test source map encoding."""

    def test_encode_vlq(self):
        self.assertEqual(encode_vlq(0), 'A')
        self.assertEqual(encode_vlq(1), 'C')
        self.assertEqual(encode_vlq(-1), 'D')
        self.assertEqual(encode_vlq(15), 'e')
        self.assertEqual(encode_vlq(16), 'gB')

    def test_relative_original_lines(self):
        position_map = PositionMap(file='out.tsx', source='in.tsx.dsl')
        position_map.add_mapping(2, 5)
        position_map.add_mapping(3, 1)
        self.assertEqual(position_map.encode_mappings(), ';AAIA;AAJA')

    def test_empty_map(self):
        self.assertEqual(PositionMap(file='out.tsx', source='in.tsx.dsl').encode_mappings(), '')


class TestDiagnostics(unittest.TestCase):
    """Test the diagnostics collector."""

    def test_duplicate_declarations_are_kept_and_reported(self):
        diagnostics = CompilerDiagnostics()
        code = compile_plain('@count = 0\n@count = 1\n<p>{count}</p>', diagnostics=diagnostics)
        self.assertEqual(code.count('const [count, setCount]'), 2)
        self.assertEqual([d.code for d in diagnostics.warnings], ['W001'])
        self.assertEqual(diagnostics.warnings[0].line, 2)

    def test_summary(self):
        diagnostics = CompilerDiagnostics()
        self.assertEqual(diagnostics.get_summary(), 'No compiler warnings.')
        diagnostics.warn_missing_markup('a.jsx.dsl')
        diagnostics.warn_duplicate_declaration('x', 'a.jsx.dsl', line=3)
        self.assertEqual(diagnostics.get_summary(), 'Compiler warnings: 1 duplicate declaration, 1 markup')
        self.assertEqual(
            str(diagnostics.warnings[1]),
            '[warning] a.jsx.dsl:3: "x" is declared more than once. '
            'Every declaration is emitted; the generated code may not compile. (W001)',
        )

    def test_clean_component_has_no_warnings(self):
        diagnostics = CompilerDiagnostics()
        compile_plain(COUNTER_SOURCE, diagnostics=diagnostics)
        self.assertEqual(diagnostics.count, 0)


if __name__ == '__main__':
    # Run with verbose output
    unittest.main(verbosity=2)

PLUGIN = ('-p', 'xmlassert.pytest_plugin')


def test_passing_assertions(pytester):
    pytester.makepyfile('''
        def test_documents(xml_assertions):
            assert xml_assertions.is_xml('<foo a="1"/>', '<foo a="1"></foo>')
            assert xml_assertions.is_well_formed_xml('<foo/>')
    ''')
    result = pytester.runpytest(*PLUGIN)
    result.assert_outcomes(passed=1)


def test_failures_are_collected(pytester):
    pytester.makepyfile('''
        def test_documents(xml_assertions):
            assert xml_assertions.is_xml('<foo a="1"/>', '<foo a="2"/>', 'first') is None
            assert xml_assertions.is_xml('<foo/>', '<foo/>', 'second')
            xml_assertions.isnt_well_formed_xml('<foo/>', 'third')
            print('reached the end')
    ''')
    result = pytester.runpytest('-s', *PLUGIN)
    result.assert_outcomes(failed=1)
    result.stdout.fnmatch_lines([
        '*reached the end*',
        '*failed: first*',
        "*attribute value for '/foo[[]1[]]/@a' didn't match*",
        '*failed: third*',
    ])
    result.stdout.no_fnmatch_line('*second*')

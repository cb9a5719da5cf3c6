from psim.core.tokenizer import has_pipeline, split_pipeline, tokenize


def test_empty_and_blank_lines_have_no_tokens():
    assert tokenize("") == []
    assert tokenize("   \t ") == []


def test_whitespace_separates_tokens():
    assert tokenize("Get-Process   chrome  -Verbose") == ["Get-Process", "chrome", "-Verbose"]


def test_quoted_run_keeps_inner_whitespace():
    assert tokenize('echo "hello world"') == ["echo", "hello world"]


def test_quoted_and_unquoted_runs_join():
    assert tokenize('New-Item -Path"a b" x') == ["New-Item", "-Patha b", "x"]


def test_empty_quotes_produce_no_token():
    assert tokenize('Write-Output ""') == ["Write-Output"]
    assert tokenize('a "" b') == ["a", "b"]


def test_quoted_whitespace_is_kept_as_a_token():
    assert tokenize('Write-Output "  "') == ["Write-Output", "  "]


def test_unterminated_quote_absorbs_rest_of_line():
    assert tokenize('echo "never closed  here') == ["echo", "never closed  here"]


def test_split_pipeline_strips_each_stage():
    assert split_pipeline("Get-Process | Sort-Object |  Format-Table ") == [
        "Get-Process",
        "Sort-Object",
        "Format-Table",
    ]


def test_pipe_needs_surrounding_spaces():
    assert has_pipeline("Get-Process | Get-Date")
    assert not has_pipeline("Get-Process|Get-Date")

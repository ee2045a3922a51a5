from tasknotes.auto_format import AutoFormatter, FormattingMode


def formatter_in(mode):
    fmt = AutoFormatter()
    fmt.mode = mode
    return fmt


def test_starts_inactive():
    fmt = AutoFormatter()
    assert fmt.mode is FormattingMode.NONE
    assert fmt.content_changed('', 'a\n') is None


def test_task_mode_continues_list_after_newline():
    fmt = formatter_in(FormattingMode.TASK)
    assert fmt.content_changed('', 'buy milk\n') == 'buy milk\n☐ '
    assert fmt.mode is FormattingMode.TASK


def test_line_with_prefix_needs_no_rewrite():
    fmt = formatter_in(FormattingMode.BULLET)
    assert fmt.content_changed('• item1\n', '• item1\n• item2') is None
    assert fmt.mode is FormattingMode.BULLET


def test_unprefixed_last_line_gets_prefix():
    fmt = formatter_in(FormattingMode.BULLET)
    assert fmt.content_changed('• a', '• a\nb') == '• a\n• b'


def test_typing_within_a_line_is_ignored():
    fmt = formatter_in(FormattingMode.TASK)
    assert fmt.content_changed('☐ bu', '☐ buy') is None


def test_double_newline_exits_mode():
    fmt = formatter_in(FormattingMode.TASK)
    assert fmt.content_changed('☐ task\n', '☐ task\n\n') is None
    assert fmt.mode is FormattingMode.NONE


def test_return_on_empty_item_keeps_mode_and_adds_marker():
    fmt = formatter_in(FormattingMode.TASK)
    assert fmt.content_changed('☐ a\n☐ ', '☐ a\n☐ \n') == '☐ a\n☐ \n☐ '
    assert fmt.mode is FormattingMode.TASK
    assert fmt.content_changed('buy milk\n☐ ', 'buy milk\n☐ \n') == 'buy milk\n☐ \n☐ '
    assert fmt.mode is FormattingMode.TASK


def test_follow_up_content_is_stable():
    fmt = formatter_in(FormattingMode.TASK)
    follow_up = fmt.content_changed('', 'buy milk\n')
    assert fmt.content_changed('buy milk\n', follow_up) is None


def test_toggle_enters_mode_and_appends_prefix():
    fmt = AutoFormatter()
    assert fmt.toggle(FormattingMode.BULLET, 'Notes\n') == 'Notes\n• '
    assert fmt.mode is FormattingMode.BULLET


def test_toggle_same_mode_exits_without_change():
    fmt = formatter_in(FormattingMode.TASK)
    assert fmt.toggle(FormattingMode.TASK, '☐ a') == '☐ a'
    assert fmt.mode is FormattingMode.NONE


def test_toggle_other_mode_switches():
    fmt = formatter_in(FormattingMode.BULLET)
    assert fmt.toggle(FormattingMode.TASK, '') == '☐ '
    assert fmt.mode is FormattingMode.TASK


def test_reset():
    fmt = formatter_in(FormattingMode.TASK)
    fmt.reset()
    assert not fmt.active

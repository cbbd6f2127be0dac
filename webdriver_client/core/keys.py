class Keys:
    """Special keys as WebDriver private-use code points.

    Use them with `WebElement.send_keys` or the `press`/`release` actions:

        element.send_keys("hello", Keys.ENTER)
    """

    NULL = "\uE000"
    CANCEL = "\uE001"
    HELP = "\uE002"
    BACKSPACE = "\uE003"
    BACK_SPACE = BACKSPACE
    TAB = "\uE004"
    CLEAR = "\uE005"
    RETURN = "\uE006"
    ENTER = "\uE007"
    SHIFT = "\uE008"
    LEFT_SHIFT = SHIFT
    CONTROL = "\uE009"
    LEFT_CONTROL = CONTROL
    ALT = "\uE00A"
    LEFT_ALT = ALT
    PAUSE = "\uE00B"
    ESCAPE = "\uE00C"
    SPACE = "\uE00D"
    PAGE_UP = "\uE00E"
    PAGE_DOWN = "\uE00F"
    END = "\uE010"
    HOME = "\uE011"
    LEFT = "\uE012"
    ARROW_LEFT = LEFT
    UP = "\uE013"
    ARROW_UP = UP
    RIGHT = "\uE014"
    ARROW_RIGHT = RIGHT
    DOWN = "\uE015"
    ARROW_DOWN = DOWN
    INSERT = "\uE016"
    DELETE = "\uE017"
    SEMICOLON = "\uE018"
    EQUALS = "\uE019"

    NUMPAD0 = "\uE01A"
    NUMPAD1 = "\uE01B"
    NUMPAD2 = "\uE01C"
    NUMPAD3 = "\uE01D"
    NUMPAD4 = "\uE01E"
    NUMPAD5 = "\uE01F"
    NUMPAD6 = "\uE020"
    NUMPAD7 = "\uE021"
    NUMPAD8 = "\uE022"
    NUMPAD9 = "\uE023"
    MULTIPLY = "\uE024"
    ADD = "\uE025"
    SEPARATOR = "\uE026"
    SUBTRACT = "\uE027"
    DECIMAL = "\uE028"
    DIVIDE = "\uE029"

    F1 = "\uE031"
    F2 = "\uE032"
    F3 = "\uE033"
    F4 = "\uE034"
    F5 = "\uE035"
    F6 = "\uE036"
    F7 = "\uE037"
    F8 = "\uE038"
    F9 = "\uE039"
    F10 = "\uE03A"
    F11 = "\uE03B"
    F12 = "\uE03C"

    META = "\uE03D"
    COMMAND = META
    ZENKAKU_HANKAKU = "\uE040"


def key_chord(*keys: str) -> str:
    """Combine keys into a chord that releases every modifier afterwards.

    `key_chord(Keys.CONTROL, "c")` presses Ctrl+C and then sends `Keys.NULL`.
    """
    return "".join(keys) + Keys.NULL

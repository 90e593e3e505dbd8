"""
Template Store - canned app bundles keyed by intent keyword
"""

from __future__ import annotations

from dataclasses import dataclass, field


# =============================================================================
# CALCULATOR
# =============================================================================

CALCULATOR_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Calculator App</title>
    <link rel="stylesheet" href="style.css">
</head>
<body>
    <div class="calculator">
        <div class="display">
            <input type="text" id="result" readonly>
        </div>
        <div class="buttons">
            <button onclick="clearDisplay()">C</button>
            <button onclick="deleteLast()">&#9003;</button>
            <button onclick="appendToDisplay('÷')">÷</button>
            <button onclick="appendToDisplay('×')">×</button>

            <button onclick="appendToDisplay('7')">7</button>
            <button onclick="appendToDisplay('8')">8</button>
            <button onclick="appendToDisplay('9')">9</button>
            <button onclick="appendToDisplay('-')">-</button>

            <button onclick="appendToDisplay('4')">4</button>
            <button onclick="appendToDisplay('5')">5</button>
            <button onclick="appendToDisplay('6')">6</button>
            <button onclick="appendToDisplay('+')">+</button>

            <button onclick="appendToDisplay('1')">1</button>
            <button onclick="appendToDisplay('2')">2</button>
            <button onclick="appendToDisplay('3')">3</button>
            <button onclick="calculate()" class="equals">=</button>

            <button onclick="appendToDisplay('0')" class="zero">0</button>
            <button onclick="appendToDisplay('.')">.</button>
        </div>
    </div>
    <script src="script.js"></script>
</body>
</html>
"""

CALCULATOR_CSS = """* {
    margin: 0;
    padding: 0;
    box-sizing: border-box;
}

body {
    font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
    background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
    min-height: 100vh;
    display: flex;
    justify-content: center;
    align-items: center;
}

.calculator {
    background: rgba(255, 255, 255, 0.1);
    border-radius: 20px;
    padding: 20px;
    backdrop-filter: blur(10px);
    box-shadow: 0 8px 32px 0 rgba(31, 38, 135, 0.37);
    border: 1px solid rgba(255, 255, 255, 0.18);
}

.display {
    margin-bottom: 20px;
}

#result {
    width: 100%;
    height: 80px;
    background: rgba(0, 0, 0, 0.3);
    border: none;
    border-radius: 10px;
    color: white;
    font-size: 2em;
    text-align: right;
    padding: 0 20px;
    outline: none;
}

.buttons {
    display: grid;
    grid-template-columns: repeat(4, 1fr);
    gap: 15px;
}

button {
    height: 60px;
    border: none;
    border-radius: 10px;
    background: rgba(255, 255, 255, 0.2);
    color: white;
    font-size: 1.2em;
    cursor: pointer;
    transition: all 0.3s ease;
}

button:hover {
    background: rgba(255, 255, 255, 0.3);
    transform: translateY(-2px);
}

button:active {
    transform: translateY(0);
}

.equals {
    grid-row: span 2;
    height: auto;
}

.zero {
    grid-column: span 2;
}
"""

CALCULATOR_JS = """let display = document.getElementById('result');
let currentInput = '';

function appendToDisplay(value) {
    currentInput += value;
    display.value = currentInput;
}

function clearDisplay() {
    currentInput = '';
    display.value = '';
}

function deleteLast() {
    currentInput = currentInput.slice(0, -1);
    display.value = currentInput;
}

// Map display symbols to operators and drop anything that is not arithmetic
function sanitize(expression) {
    return expression
        .replace(/×/g, '*')
        .replace(/÷/g, '/')
        .replace(/[^0-9.+\\-*/()]/g, '');
}

function tokenize(expression) {
    const tokens = [];
    let i = 0;
    while (i < expression.length) {
        const ch = expression[i];
        if ('+-*/()'.includes(ch)) {
            tokens.push(ch);
            i++;
        } else {
            let number = '';
            while (i < expression.length && '0123456789.'.includes(expression[i])) {
                number += expression[i];
                i++;
            }
            if (number === '' || number.split('.').length > 2) {
                throw new Error('Invalid number');
            }
            tokens.push(parseFloat(number));
        }
    }
    return tokens;
}

// Recursive-descent parser: expression := term (('+'|'-') term)*
function safeEval(expression) {
    const tokens = tokenize(expression);
    let pos = 0;

    function parseExpression() {
        let value = parseTerm();
        while (tokens[pos] === '+' || tokens[pos] === '-') {
            const op = tokens[pos++];
            const right = parseTerm();
            value = op === '+' ? value + right : value - right;
        }
        return value;
    }

    function parseTerm() {
        let value = parseFactor();
        while (tokens[pos] === '*' || tokens[pos] === '/') {
            const op = tokens[pos++];
            const right = parseFactor();
            if (op === '/' && right === 0) {
                throw new Error('Division by zero');
            }
            value = op === '*' ? value * right : value / right;
        }
        return value;
    }

    function parseFactor() {
        const token = tokens[pos++];
        if (token === '-') {
            return -parseFactor();
        }
        if (token === '(') {
            const value = parseExpression();
            if (tokens[pos++] !== ')') {
                throw new Error('Unbalanced parentheses');
            }
            return value;
        }
        if (typeof token === 'number') {
            return token;
        }
        throw new Error('Unexpected token');
    }

    const result = parseExpression();
    if (pos !== tokens.length) {
        throw new Error('Unexpected trailing input');
    }
    return result;
}

function calculate() {
    try {
        const result = safeEval(sanitize(currentInput));
        display.value = result;
        currentInput = result.toString();
    } catch (error) {
        display.value = 'Error';
        currentInput = '';
    }
}

// Keyboard support
document.addEventListener('keydown', function(event) {
    const key = event.key;

    if ('0123456789+-.'.includes(key)) {
        appendToDisplay(key);
    } else if (key === '*') {
        appendToDisplay('×');
    } else if (key === '/') {
        event.preventDefault();
        appendToDisplay('÷');
    } else if (key === 'Enter' || key === '=') {
        calculate();
    } else if (key === 'Escape' || key === 'c' || key === 'C') {
        clearDisplay();
    } else if (key === 'Backspace') {
        deleteLast();
    }
});
"""


# =============================================================================
# TODO LIST
# =============================================================================

TODO_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Todo List App</title>
    <link rel="stylesheet" href="style.css">
</head>
<body>
    <div class="container">
        <h1>My Todo List</h1>
        <div class="input-container">
            <input type="text" id="todoInput" placeholder="Add a new task...">
            <button onclick="addTodo()">Add</button>
        </div>
        <div class="filters">
            <button class="filter-btn active" onclick="filterTodos('all', this)">All</button>
            <button class="filter-btn" onclick="filterTodos('active', this)">Active</button>
            <button class="filter-btn" onclick="filterTodos('completed', this)">Completed</button>
        </div>
        <ul id="todoList"></ul>
        <div class="stats">
            <span id="totalTasks">0 tasks</span>
            <button onclick="clearCompleted()">Clear Completed</button>
        </div>
    </div>
    <script src="script.js"></script>
</body>
</html>
"""

TODO_CSS = """* {
    margin: 0;
    padding: 0;
    box-sizing: border-box;
}

body {
    font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
    background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
    min-height: 100vh;
    padding: 20px;
}

.container {
    max-width: 600px;
    margin: 0 auto;
    background: white;
    border-radius: 15px;
    padding: 30px;
    box-shadow: 0 10px 30px rgba(0, 0, 0, 0.1);
}

h1 {
    text-align: center;
    color: #333;
    margin-bottom: 30px;
    font-size: 2.5em;
}

.input-container {
    display: flex;
    gap: 10px;
    margin-bottom: 20px;
}

#todoInput {
    flex: 1;
    padding: 15px;
    border: 2px solid #e0e0e0;
    border-radius: 8px;
    font-size: 16px;
    outline: none;
}

#todoInput:focus {
    border-color: #667eea;
}

button {
    padding: 15px 20px;
    background: #667eea;
    color: white;
    border: none;
    border-radius: 8px;
    cursor: pointer;
    font-size: 16px;
    transition: all 0.3s ease;
}

button:hover {
    background: #5a6fd8;
    transform: translateY(-2px);
}

.filters {
    display: flex;
    gap: 10px;
    margin-bottom: 20px;
    justify-content: center;
}

.filter-btn {
    padding: 8px 16px;
    background: transparent;
    color: #667eea;
    border: 2px solid #667eea;
    font-size: 14px;
}

.filter-btn.active {
    background: #667eea;
    color: white;
}

#todoList {
    list-style: none;
    margin-bottom: 20px;
}

.todo-item {
    display: flex;
    align-items: center;
    padding: 15px;
    border: 1px solid #e0e0e0;
    border-radius: 8px;
    margin-bottom: 10px;
    transition: all 0.3s ease;
}

.todo-item.completed {
    opacity: 0.6;
    text-decoration: line-through;
}

.todo-item input[type="checkbox"] {
    margin-right: 15px;
    transform: scale(1.2);
}

.todo-text {
    flex: 1;
    font-size: 16px;
}

.delete-btn {
    background: #ff4757;
    padding: 5px 10px;
    font-size: 12px;
}

.stats {
    display: flex;
    justify-content: space-between;
    align-items: center;
    padding-top: 20px;
    border-top: 1px solid #e0e0e0;
}

.stats button {
    background: #ff4757;
    padding: 8px 16px;
    font-size: 14px;
}
"""

TODO_JS = """let todos = JSON.parse(localStorage.getItem('todos')) || [];
let currentFilter = 'all';

function saveTodos() {
    localStorage.setItem('todos', JSON.stringify(todos));
}

function addTodo() {
    const input = document.getElementById('todoInput');
    const text = input.value.trim();

    if (text === '') return;

    todos.push({
        id: Date.now(),
        text: text,
        completed: false,
        createdAt: new Date().toISOString()
    });
    input.value = '';
    saveTodos();
    renderTodos();
}

function toggleTodo(id) {
    todos = todos.map(todo =>
        todo.id === id ? { ...todo, completed: !todo.completed } : todo
    );
    saveTodos();
    renderTodos();
}

function deleteTodo(id) {
    todos = todos.filter(todo => todo.id !== id);
    saveTodos();
    renderTodos();
}

function filterTodos(filter, button) {
    currentFilter = filter;
    document.querySelectorAll('.filter-btn').forEach(btn => btn.classList.remove('active'));
    button.classList.add('active');
    renderTodos();
}

function clearCompleted() {
    todos = todos.filter(todo => !todo.completed);
    saveTodos();
    renderTodos();
}

function escapeHtml(text) {
    const div = document.createElement('div');
    div.textContent = text;
    return div.innerHTML;
}

function renderTodos() {
    const todoList = document.getElementById('todoList');
    const totalTasks = document.getElementById('totalTasks');

    let filteredTodos = todos;
    if (currentFilter === 'active') {
        filteredTodos = todos.filter(todo => !todo.completed);
    } else if (currentFilter === 'completed') {
        filteredTodos = todos.filter(todo => todo.completed);
    }

    todoList.innerHTML = filteredTodos.map(todo => `
        <li class="todo-item ${todo.completed ? 'completed' : ''}">
            <input type="checkbox" ${todo.completed ? 'checked' : ''}
                   onchange="toggleTodo(${todo.id})">
            <span class="todo-text">${escapeHtml(todo.text)}</span>
            <button class="delete-btn" onclick="deleteTodo(${todo.id})">Delete</button>
        </li>
    `).join('');

    const activeCount = todos.filter(todo => !todo.completed).length;
    totalTasks.textContent = `${activeCount} active task${activeCount !== 1 ? 's' : ''}`;
}

document.getElementById('todoInput').addEventListener('keypress', function(e) {
    if (e.key === 'Enter') {
        addTodo();
    }
});

renderTodos();
"""


# =============================================================================
# INTENT REGISTRY
# =============================================================================


@dataclass(frozen=True)
class Intent:
    """A keyword-triggered app template"""

    keyword: str
    title: str
    noun: str
    features: tuple[str, ...]
    intro: str
    built: str
    files: tuple[tuple[str, str, str], ...] = field(default=())  # (name, language, content)

    def bundle(self) -> dict[str, dict[str, str]]:
        """Fresh FileBundle for this intent, in creation order"""
        return {name: {"content": content, "language": language} for name, language, content in self.files}


INTENTS: tuple[Intent, ...] = (
    Intent(
        keyword="calculator",
        title="Calculator App",
        noun="calculator",
        features=("Basic arithmetic", "Keyboard support", "Modern design", "Error handling"),
        intro="I'll create a modern calculator app with a sleek design and full functionality.",
        built=(
            "✅ Calculator app created! Your modern calculator includes:\n\n"
            "🔢 Full arithmetic operations\n"
            "🎨 Beautiful glass-morphism design\n"
            "⌨️ Keyboard support\n"
            "📱 Responsive layout\n\n"
            "Check the preview to see your calculator in action!"
        ),
        files=(
            ("index.html", "html", CALCULATOR_HTML),
            ("style.css", "css", CALCULATOR_CSS),
            ("script.js", "javascript", CALCULATOR_JS),
        ),
    ),
    Intent(
        keyword="todo",
        title="Todo List App",
        noun="todo list",
        features=("Add/remove tasks", "Mark complete", "Filter tasks", "Local storage"),
        intro="I'll build a feature-rich todo list app with modern design and local storage.",
        built=(
            "✅ Todo List app created! Your productivity app includes:\n\n"
            "📝 Add/delete tasks\n"
            "✅ Mark tasks as complete\n"
            "🔍 Filter by status (All/Active/Completed)\n"
            "💾 Local storage persistence\n"
            "📊 Task statistics\n"
            "🎨 Modern, responsive design\n\n"
            "Start organizing your tasks now!"
        ),
        files=(
            ("index.html", "html", TODO_HTML),
            ("style.css", "css", TODO_CSS),
            ("script.js", "javascript", TODO_JS),
        ),
    ),
)

GENERIC_RESPONSE = (
    "I can help you build that! Let me know if you'd like me to create the complete "
    "application with all files and functionality."
)
GENERIC_PLAN_TITLE = "Custom App"
GENERIC_PLAN_NOUN = "custom"
GENERIC_FEATURES = ("Custom functionality", "Modern design", "Responsive layout")


def find_intent(prompt: str) -> Intent | None:
    """First intent whose keyword appears in ``prompt`` (case-insensitive)"""
    lowered = prompt.lower()
    for intent in INTENTS:
        if intent.keyword in lowered:
            return intent
    return None

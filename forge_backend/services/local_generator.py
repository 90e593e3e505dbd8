"""
Local fallback generator - canned responses used when the backend is unreachable
"""

from __future__ import annotations

import random

SIMPLE_APP_RESPONSE = """I'll create a modern application for you! Here's the implementation:

```html
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Your Application</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, sans-serif;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            min-height: 100vh;
            display: flex;
            align-items: center;
            justify-content: center;
        }
        .container {
            background: white;
            padding: 2rem;
            border-radius: 20px;
            box-shadow: 0 20px 40px rgba(0,0,0,0.1);
            text-align: center;
            max-width: 500px;
            width: 90%;
        }
        h1 { color: #333; margin-bottom: 1rem; }
        .button {
            background: linear-gradient(135deg, #667eea, #764ba2);
            color: white;
            border: none;
            padding: 1rem 2rem;
            border-radius: 10px;
            cursor: pointer;
            font-size: 1rem;
            margin: 0.5rem;
        }
        .result { margin-top: 1rem; padding: 1rem; background: #f0f0f0; border-radius: 10px; }
    </style>
</head>
<body>
    <div class="container">
        <h1>🚀 Your Application</h1>
        <p>Built with modern web technologies!</p>
        <button class="button" onclick="showDemo()">Try Demo</button>
        <div id="result" class="result" style="display:none;">
            <h3>Success! 🎉</h3>
            <p>Your application is working perfectly!</p>
        </div>
    </div>
    <script>
        function showDemo() {
            document.getElementById('result').style.display = 'block';
        }
    </script>
</body>
</html>
```

This creates a responsive application with interactive elements."""

FEATURE_APP_RESPONSE = """Here's your complete application with advanced features:

```html
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Advanced App</title>
    <style>
        :root {
            --primary: #6366f1;
            --secondary: #8b5cf6;
            --background: #f8fafc;
            --text: #1e293b;
            --card: #ffffff;
        }
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif;
            background: var(--background);
            color: var(--text);
            line-height: 1.6;
        }
        .app { max-width: 1200px; margin: 0 auto; padding: 2rem; }
        .header {
            text-align: center;
            margin-bottom: 3rem;
            padding: 2rem;
            background: var(--card);
            border-radius: 20px;
        }
        .features {
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
            gap: 2rem;
        }
        .feature-card { background: var(--card); padding: 2rem; border-radius: 15px; }
        .btn {
            background: linear-gradient(135deg, var(--primary), var(--secondary));
            color: white;
            border: none;
            padding: 1rem 2rem;
            border-radius: 10px;
            cursor: pointer;
        }
        .status { padding: 1rem; border-radius: 10px; margin-top: 1rem; text-align: center; }
        .success { background: #dcfce7; color: #166534; }
        .info { background: #dbeafe; color: #1e40af; }
        @media (max-width: 768px) {
            .features { grid-template-columns: 1fr; }
        }
    </style>
</head>
<body>
    <div class="app">
        <header class="header">
            <h1>🎯 Advanced Application</h1>
            <p>Modern, responsive, and feature-rich web application</p>
        </header>
        <div class="features">
            <div class="feature-card"><h3>⚡ Lightning Fast</h3><p>Optimized for modern browsers</p></div>
            <div class="feature-card"><h3>📱 Responsive</h3><p>Works on every screen size</p></div>
            <div class="feature-card"><h3>🔧 Interactive</h3><p>Rich interactions and animations</p></div>
        </div>
        <button class="btn" onclick="runDemo()">🚀 Start Demo</button>
        <button class="btn" onclick="resetDemo()">🔄 Reset</button>
        <div id="status" class="status info" style="display:none;"></div>
    </div>
    <script>
        function runDemo() {
            const status = document.getElementById('status');
            status.style.display = 'block';
            status.className = 'status success';
            status.textContent = '✅ Demo running successfully! All features working.';
        }
        function resetDemo() {
            document.getElementById('status').style.display = 'none';
        }
    </script>
</body>
</html>
```

This application features a responsive layout, interactive elements and professional styling."""

CANNED_RESPONSES = (SIMPLE_APP_RESPONSE, FEATURE_APP_RESPONSE)


def generate_local_code(prompt: str, rng: random.Random | None = None) -> str:
    """Pick one of the canned responses; the prompt does not influence the choice"""
    rng = rng or random.Random()
    return rng.choice(CANNED_RESPONSES)

"""
HTML Template
=============

HTML template for the kiosk page. Rendered with a ``theme`` object.
"""

HTML_TEMPLATE = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>AI Attendance System</title>
    <style>
      * {
        box-sizing: border-box;
      }
      body {
        font-family: 'Segoe UI', system-ui, -apple-system, sans-serif;
        margin: 0;
        min-height: 100vh;
        background: {{ theme.page_background }};
        color: {{ theme.text }};
        display: flex;
        justify-content: center;
        align-items: center;
        padding: 1rem;
      }
      .panel {
        background: {{ theme.panel_background }};
        padding: 2rem;
        border-radius: 18px;
        box-shadow: 0 20px 45px rgba(15, 23, 42, 0.25);
        width: min(820px, 100%);
      }
      h1 {
        margin: 0 0 0.25rem;
        font-size: 1.6rem;
      }
      .subtitle {
        color: {{ theme.muted }};
        margin-bottom: 1.5rem;
      }
      label {
        display: block;
        font-size: 0.9rem;
        font-weight: 600;
        margin-bottom: 0.4rem;
      }
      select {
        width: 100%;
        padding: 0.5rem;
        border-radius: 8px;
        border: 1px solid {{ theme.border }};
        margin-bottom: 1rem;
      }
      .stream-container {
        position: relative;
        aspect-ratio: 16 / 9;
        background: #020617;
        border-radius: 12px;
        overflow: hidden;
        border: 1px solid {{ theme.border }};
      }
      .stream-container img {
        width: 100%;
        height: 100%;
        object-fit: cover;
        display: block;
      }
      .overlay {
        position: absolute;
        inset: 0;
        display: flex;
        align-items: center;
        justify-content: center;
        color: {{ theme.accent }};
        background: rgba(255, 255, 255, 0.6);
        font-weight: 600;
      }
      .buttons {
        margin: 1rem 0;
        display: flex;
        justify-content: center;
      }
      button {
        border: none;
        padding: 0.7rem 1.4rem;
        border-radius: 999px;
        font-size: 1rem;
        font-weight: 600;
        cursor: pointer;
        background: {{ theme.accent }};
        color: #f8fafc;
      }
      button:disabled {
        opacity: 0.5;
        cursor: not-allowed;
      }
      .status {
        display: flex;
        gap: 0.75rem;
        align-items: center;
        padding: 1rem;
        border-radius: 10px;
        font-weight: 500;
      }
{% for name, style in theme.statuses.items() %}
      .status.{{ name }} {
        color: {{ style.foreground }};
        background: {{ style.background }};
      }
{% endfor %}
      .hidden {
        display: none !important;
      }
    </style>
  </head>
  <body>
    <div class="panel">
      <h1>AI Attendance System</h1>
      <p class="subtitle">Capture your attendance with facial recognition.</p>

      <div id="device-picker" class="hidden">
        <label for="devices">Select Camera Device</label>
        <select id="devices" onchange="selectDevice(this.value)"></select>
      </div>

      <div class="stream-container">
        <img id="preview" alt="Live camera" />
        <img id="captured" class="hidden" alt="Captured" />
        <div id="overlay" class="overlay">Starting camera...</div>
      </div>

      <div class="buttons">
        <button id="capture" onclick="capture()" disabled>Capture Attendance</button>
        <button id="reset" class="hidden" onclick="resetCapture()">Take New Photo</button>
      </div>

      <div id="status" class="status hidden">
        <span id="status-icon"></span>
        <span id="status-message"></span>
      </div>
    </div>
    <script>
      const ICONS = {
{% for name, style in theme.statuses.items() %}
        "{{ name }}": "{{ style.icon }}",
{% endfor %}
      };
      const preview = document.getElementById('preview');
      const captured = document.getElementById('captured');
      const overlay = document.getElementById('overlay');
      const picker = document.getElementById('device-picker');
      const devices = document.getElementById('devices');
      const captureBtn = document.getElementById('capture');
      const resetBtn = document.getElementById('reset');
      const statusBox = document.getElementById('status');
      let pollTimer = null;
      let capturing = false;

      function render(state) {
        picker.classList.toggle('hidden', state.devices.length <= 1);
        devices.innerHTML = '';
        state.devices.forEach(function(device) {
          const option = document.createElement('option');
          option.value = device.device_id;
          option.textContent = device.label;
          option.selected = device.device_id === state.selected_id;
          devices.appendChild(option);
        });
        devices.disabled = state.processing;

        const hasImage = Boolean(state.image);
        captured.classList.toggle('hidden', !hasImage);
        preview.classList.toggle('hidden', hasImage);
        if (hasImage) {
          captured.src = state.image;
        }
        overlay.classList.toggle('hidden', hasImage || state.ready);
        overlay.textContent = state.state === 'idle' ? 'Camera unavailable' : 'Starting camera...';

        captureBtn.classList.toggle('hidden', hasImage);
        captureBtn.disabled = state.state !== 'ready';
        resetBtn.classList.toggle('hidden', !hasImage);
        resetBtn.disabled = state.processing;

        if (state.status && state.status.message) {
          statusBox.className = 'status ' + (ICONS[state.status.status] ? state.status.status : 'info');
          document.getElementById('status-icon').textContent = ICONS[state.status.status] || ICONS.info;
          document.getElementById('status-message').textContent = state.status.message;
        } else {
          statusBox.className = 'status hidden';
        }

        clearTimeout(pollTimer);
        if (state.state === 'initializing') {
          pollTimer = setTimeout(refresh, 500);
        }
      }

      async function call(method, url, body) {
        const response = await fetch(url, {
          method: method,
          headers: {'Content-Type': 'application/json'},
          body: body ? JSON.stringify(body) : undefined,
        });
        return response.json();
      }

      async function refresh() {
        render(await call('GET', '/api/state'));
      }

      async function start() {
        render(await call('POST', '/api/start', {viewport_width: window.innerWidth}));
        preview.src = '/video_feed?t=' + Date.now();
      }

      async function selectDevice(deviceId) {
        render(await call('POST', '/api/devices/select', {device_id: deviceId}));
        preview.src = '/video_feed?t=' + Date.now();
      }

      async function refreshWhileCapturing() {
        const state = await call('GET', '/api/state');
        if (capturing) {
          render(state);
        }
      }

      async function capture() {
        // The capture request answers only once the submission settles
        captureBtn.disabled = true;
        capturing = true;
        const processingPoll = setInterval(refreshWhileCapturing, 250);
        let state;
        try {
          state = await call('POST', '/api/capture');
        } finally {
          capturing = false;
          clearInterval(processingPoll);
        }
        render(state);
      }

      async function resetCapture() {
        render(await call('POST', '/api/reset'));
      }

      start();
    </script>
  </body>
</html>
"""

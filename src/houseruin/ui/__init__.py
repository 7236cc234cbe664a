"""Interactive Streamlit front end and Plotly charts."""

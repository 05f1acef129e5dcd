import streamlit as st

from perkhub.frontend.views import render_home

st.set_page_config(page_title="Perkhub", layout="centered")

render_home()
